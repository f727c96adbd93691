from __future__ import annotations

from dataclasses import dataclass
from datetime import date as date_type
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_iso_date
from ..core.enums import AttendanceStatus
from ..core.exceptions import MalformedRecord


def _mark_day(raw: Any) -> str:
    """Normalize a mark date to a zero-padded ISO day string."""
    if isinstance(raw, datetime):
        return raw.date().isoformat()
    if isinstance(raw, date_type):
        return raw.isoformat()
    if raw is None or not str(raw).strip():
        raise MalformedRecord("Attendance record without a date")
    text = str(raw).strip()
    try:
        day = parse_iso_date(text)
    except ValueError:
        raise MalformedRecord(f"Invalid attendance date: {raw!r}")
    # strptime also accepts 2025-1-5; ordering needs the padded form.
    if day.isoformat() != text:
        raise MalformedRecord(f"Invalid attendance date: {raw!r}")
    return text


@dataclass(frozen=True)
class AttendanceMark:
    """One daily mark. ``date`` is an ISO ``YYYY-MM-DD`` string."""

    student_id: int
    date: str
    status: AttendanceStatus
    batch_timing: Optional[str] = None
    student_name: Optional[str] = None

    @classmethod
    def from_record(cls, record: Any) -> "AttendanceMark":
        if isinstance(record, AttendanceMark):
            return record
        if not isinstance(record, Mapping):
            raise MalformedRecord(f"Unsupported attendance record: {type(record).__name__}")

        day = _mark_day(record.get("date", record.get("mark_date")))

        try:
            status = AttendanceStatus(str(record.get("status") or "").strip().upper())
        except ValueError:
            raise MalformedRecord(f"Unknown attendance status: {record.get('status')!r}")

        try:
            student_id = int(record["student_id"])
        except (KeyError, TypeError, ValueError):
            raise MalformedRecord("Attendance record without a valid student_id")

        return cls(
            student_id=student_id,
            date=day,
            status=status,
            batch_timing=record.get("batch_timing"),
            student_name=record.get("student_name"),
        )

    def to_dict(self) -> dict:
        return {
            "student_id": self.student_id,
            "student_name": self.student_name,
            "date": self.date,
            "batch_timing": self.batch_timing,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class StreakScan:
    """Longest run of consecutive absences in one student's history."""

    max_streak: int
    dates: tuple[str, ...]
    skipped: int = 0


@dataclass(frozen=True)
class DefaulterView:
    student_id: int
    absent_streak: int
    absent_dates: tuple[str, ...]

    def to_dict(self) -> dict:
        return {
            "student_id": self.student_id,
            "absent_streak": self.absent_streak,
            "absent_dates": list(self.absent_dates),
        }


@dataclass(frozen=True)
class HistoryView:
    """Filtered per-(date, batch) status rows, in their original order."""

    rows: tuple[AttendanceMark, ...]
    skipped: int = 0
