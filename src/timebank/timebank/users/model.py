from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Employee as seen by this service (read from the user directory)."""

    user_id: int
    full_name: str
    email: str
    role: Role
    shift_name: Optional[str] = None
    work_period: Optional[str] = None
    sector: Optional[str] = None
    is_active: bool = True
