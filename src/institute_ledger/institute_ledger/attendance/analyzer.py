"""Attendance history analysis.

Pure functions over a snapshot of marks: defaulter detection (a run of
consecutive absences at or above a threshold) and the per-date batch status
table. PRESENT resets the absence run.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Union

from ..core.constants import DEFAULT_DEFAULTER_THRESHOLD
from ..core.enums import AttendanceStatus, HistoryFilter
from ..core.exceptions import MalformedRecord, ValidationError
from ..students.model import Student
from .model import AttendanceMark, DefaulterView, HistoryView, StreakScan

logger = logging.getLogger(__name__)


def normalize_marks(marks: Optional[Iterable[Any]]) -> tuple[list[AttendanceMark], int]:
    valid: list[AttendanceMark] = []
    skipped = 0
    for raw in marks or ():
        try:
            valid.append(AttendanceMark.from_record(raw))
        except MalformedRecord as e:
            skipped += 1
            logger.warning("Skipping malformed attendance record: %s", e)
    return valid, skipped


def scan_absences(marks: Optional[Iterable[Any]]) -> StreakScan:
    """Find the longest ABSENT run, in date order.

    Dates compare as strings, so they must be zero-padded ISO dates. The sort
    is stable and duplicates for one date stay separate entries. On a tie the
    first longest run is kept.
    """
    valid, skipped = normalize_marks(marks)

    best: tuple[str, ...] = ()
    current: list[str] = []
    for mark in sorted(valid, key=lambda m: m.date):
        if mark.status == AttendanceStatus.ABSENT:
            current.append(mark.date)
            if len(current) > len(best):
                best = tuple(current)
        else:
            current = []

    return StreakScan(max_streak=len(best), dates=best, skipped=skipped)


def _check_threshold(threshold: int) -> int:
    threshold = int(threshold)
    if threshold < 1:
        raise ValidationError("Defaulter threshold must be at least 1")
    return threshold


def defaulter_from_scan(student_id: int, scan: StreakScan, threshold: int) -> Optional[DefaulterView]:
    if scan.max_streak < _check_threshold(threshold):
        return None
    return DefaulterView(student_id=student_id, absent_streak=scan.max_streak, absent_dates=scan.dates)


def analyze_defaulter(
    student: Union[Student, int],
    marks: Optional[Iterable[Any]],
    threshold: int = DEFAULT_DEFAULTER_THRESHOLD,
) -> Optional[DefaulterView]:
    """Return a DefaulterView when the student's longest absence run reaches ``threshold``."""
    student_id = student.student_id if isinstance(student, Student) else int(student)
    return defaulter_from_scan(student_id, scan_absences(marks), threshold)


def _parse_filter(status_filter: Union[HistoryFilter, str, None]) -> HistoryFilter:
    if isinstance(status_filter, HistoryFilter):
        return status_filter
    try:
        return HistoryFilter(str(status_filter or HistoryFilter.ALL.value).strip().upper())
    except ValueError:
        raise ValidationError(f"Unknown attendance filter: {status_filter}")


def aggregate_batch_history(
    marks: Optional[Iterable[Any]],
    status_filter: Union[HistoryFilter, str, None] = HistoryFilter.ALL,
) -> HistoryView:
    """Filter one day's marks for one batch by status, keeping their order."""
    wanted = _parse_filter(status_filter)
    valid, skipped = normalize_marks(marks)
    if wanted == HistoryFilter.ALL:
        rows = tuple(valid)
    else:
        rows = tuple(m for m in valid if m.status.value == wanted.value)
    return HistoryView(rows=rows, skipped=skipped)
