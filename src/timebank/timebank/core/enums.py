from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role as stored by the user directory."""

    ADMIN = "ADMIN"
    EMPLOYEE = "EMPLOYEE"


class PunchType(str, Enum):
    """The four punches of a shift, in their expected order."""

    ENTRY = "ENTRY"
    BREAK_START = "BREAK_START"
    BREAK_END = "BREAK_END"
    EXIT = "EXIT"


class ReportPeriod(str, Enum):
    DAY = "DAY"
    WEEK = "WEEK"
    FORTNIGHT = "FORTNIGHT"
    MONTH = "MONTH"
    BIMESTER = "BIMESTER"
    TRIMESTER = "TRIMESTER"
    SEMESTER = "SEMESTER"
    YEAR = "YEAR"
    CUSTOM = "CUSTOM"
