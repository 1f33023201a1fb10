from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Attendance status as stored in the attendance_records.status column."""

    PRESENT = "present"
    ABSENT = "absent"
    HALFDAY = "halfday"


class ReportType(str, Enum):
    DETAILED = "detailed"
    SUMMARY = "summary"


class EventKind(str, Enum):
    """Kind of a ledger event replayed by the running-balance report."""

    ATTENDANCE = "attendance"
    PAYMENT = "payment"
