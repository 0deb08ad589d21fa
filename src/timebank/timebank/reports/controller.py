from __future__ import annotations

import csv
import io
import logging
from datetime import date

from flask import Flask, jsonify, request

from ..balance.model import BalanceSummary
from ..common.datetime_utils import now_local, parse_iso_date
from ..container import Container
from ..core.constants import DATE_FORMAT
from ..core.enums import ReportPeriod
from .periods import resolve_period
from .service import ReportData

logger = logging.getLogger(__name__)

REPORT_CSV_FIELDS = [
    "work_date",
    "entry",
    "break_start",
    "break_end",
    "exit",
    "worked_hours",
    "balance",
    "observations",
]


def register(app: Flask, container: Container) -> None:
    def _anchor() -> date | None:
        raw = request.args.get("date")
        if not raw:
            return now_local().date()
        try:
            return parse_iso_date(raw)
        except ValueError:
            return None

    def _period() -> str:
        return (request.args.get("period") or ReportPeriod.DAY.value).upper()

    def _build_report(user_id: int) -> ReportData:
        anchor = _anchor()
        if anchor is None:
            return ReportData(start=None, end=None, rows=[], summary={})
        return container.report_service.build_report(
            user_id,
            period=_period(),
            anchor=anchor,
            start=request.args.get("start"),
            end=request.args.get("end"),
        )

    def _write_report_csv(*, data: ReportData, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=REPORT_CSV_FIELDS, extrasaction="ignore")
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/users/<int:user_id>/balance", methods=["GET"], endpoint="balance")
    def balance(user_id: int):
        anchor = _anchor()
        date_range = resolve_period(
            _period(),
            anchor,
            start=request.args.get("start"),
            end=request.args.get("end"),
        ) if anchor else None

        if date_range is None:
            logger.warning("Empty balance for user_id=%s: unusable range %s", user_id, dict(request.args))
            result = BalanceSummary()
        else:
            result = container.balance_aggregator.aggregate(user_id, date_range)

        payload = result.as_dict()
        payload["start"] = date_range.start.strftime(DATE_FORMAT) if date_range else None
        payload["end"] = date_range.end.strftime(DATE_FORMAT) if date_range else None
        payload["success"] = True
        return jsonify(payload)

    @app.route("/api/users/<int:user_id>/report", methods=["GET"], endpoint="report")
    def report(user_id: int):
        data = _build_report(user_id)
        return jsonify(
            {
                "success": True,
                "start": data.start.strftime(DATE_FORMAT) if data.start else None,
                "end": data.end.strftime(DATE_FORMAT) if data.end else None,
                "rows": data.rows,
                "summary": data.summary,
            }
        )

    @app.route("/api/users/<int:user_id>/report.csv", methods=["GET"], endpoint="report_csv")
    def report_csv(user_id: int):
        data = _build_report(user_id)
        if data.start and data.end:
            filename = f"timebank_{user_id}_{data.start.strftime('%Y%m%d')}_{data.end.strftime('%Y%m%d')}.csv"
        else:
            filename = f"timebank_{user_id}.csv"
        return _write_report_csv(data=data, filename=filename)

    @app.route("/api/users/<int:user_id>/dashboard", methods=["GET"], endpoint="dashboard")
    def dashboard(user_id: int):
        summary = container.report_service.dashboard(user_id)
        summary["success"] = True
        return jsonify(summary)
