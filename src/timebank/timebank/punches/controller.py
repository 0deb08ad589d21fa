from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.formatting import format_seconds
from ..common.validators import optional_text, require_punch_type
from ..container import Container
from ..core.constants import DATE_FORMAT
from ..core.exceptions import NotFoundError, ValidationError
from .codec import parse_timestamp, punch_to_dict
from .model import AmendPunch, RegisterPunch

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _error(message: str, status: int):
        return jsonify({"success": False, "message": message}), status

    @app.route("/api/users/<int:user_id>/punches", methods=["GET"], endpoint="list_punches")
    def list_punches(user_id: int):
        timeline = container.punch_service.timeline(user_id)
        return jsonify({"success": True, "punches": [punch_to_dict(p) for p in timeline]})

    @app.route("/api/users/<int:user_id>/punches", methods=["POST"], endpoint="register_punch")
    def register_punch(user_id: int):
        data = request.get_json(silent=True) or {}
        try:
            timestamp = parse_timestamp(data["timestamp"]) if data.get("timestamp") else None
            command = RegisterPunch(
                punch_type=require_punch_type(data.get("type")),
                timestamp=timestamp,
                attachment=optional_text(data.get("attachment")),
                observation=optional_text(data.get("observation")),
            )
            punch = container.punch_service.apply(user_id, command)
        except NotFoundError as e:
            return _error(str(e), 404)
        except ValidationError as e:
            return _error(str(e), 400)
        except Exception:
            logger.exception("Failed to register punch for user_id=%s", user_id)
            return _error("System error while registering the punch", 500)
        return jsonify({"success": True, "punch": punch_to_dict(punch)}), 201

    @app.route("/api/users/<int:user_id>/punches/<punch_id>", methods=["PATCH"], endpoint="amend_punch")
    def amend_punch(user_id: int, punch_id: str):
        data = request.get_json(silent=True) or {}
        try:
            if not data.get("timestamp"):
                raise ValidationError("timestamp is required")
            command = AmendPunch(
                punch_id=punch_id,
                timestamp=parse_timestamp(data["timestamp"]),
                attachment=optional_text(data.get("attachment")),
                observation=optional_text(data.get("observation")),
            )
            punch = container.punch_service.apply(user_id, command)
        except NotFoundError as e:
            return _error(str(e), 404)
        except ValidationError as e:
            return _error(str(e), 400)
        except Exception:
            logger.exception("Failed to amend punch %s for user_id=%s", punch_id, user_id)
            return _error("System error while amending the punch", 500)
        return jsonify({"success": True, "punch": punch_to_dict(punch)})

    @app.route("/api/users/<int:user_id>/worked/<day>", methods=["GET"], endpoint="worked_for_day")
    def worked_for_day(user_id: int, day: str):
        try:
            work_date = parse_iso_date(day)
        except ValueError:
            return _error(f"Invalid date: {day}", 400)

        seconds = container.punch_service.worked_seconds(user_id, work_date)
        return jsonify(
            {
                "success": True,
                "date": work_date.strftime(DATE_FORMAT),
                "worked_seconds": seconds,
                "worked": format_seconds(seconds),
            }
        )
