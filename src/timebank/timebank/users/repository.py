from __future__ import annotations

from typing import Optional, Protocol

from .model import User


class UserDirectory(Protocol):
    """Read-only view of the external user directory."""

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError
