from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional, Sequence, Union

from ..common.datetime_utils import coerce_date
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_DEFAULTER_THRESHOLD, DEFAULT_SCAN_WORKERS
from ..core.enums import AttendanceStatus, HistoryFilter
from ..core.exceptions import NotFoundError, ValidationError
from ..students.model import Student
from ..students.repository import StudentRepository
from .analyzer import aggregate_batch_history, defaulter_from_scan, normalize_marks, scan_absences
from .model import AttendanceMark, DefaulterView, HistoryView
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DefaulterRow:
    student: Student
    view: DefaulterView

    def to_dict(self) -> dict:
        data = self.view.to_dict()
        data.update(
            {
                "student_name": self.student.full_name,
                "mobile_number": self.student.mobile_number,
                "batch_timing": self.student.batch_timing,
            }
        )
        return data


@dataclass(frozen=True)
class DefaulterReport:
    batch_timing: str
    threshold: int
    defaulters: list[DefaulterRow]
    skipped: int = 0


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        *,
        threshold: int = DEFAULT_DEFAULTER_THRESHOLD,
        max_workers: int = DEFAULT_SCAN_WORKERS,
    ):
        self._attendance = attendance
        self._students = students
        self._threshold = int(threshold)
        self._max_workers = max(1, int(max_workers))

    def list_batches(self) -> list[str]:
        return sorted({s.batch_timing for s in self._students.list_all() if s.batch_timing})

    def _students_in_batch(self, batch_timing: str) -> list[Student]:
        students = list(self._students.list_by_batch(batch_timing))
        if not students:
            raise ValidationError("No students found for the selected batch")
        return students

    def mark_batch(
        self,
        *,
        work_date: Union[date, str],
        batch_timing: str,
        statuses: Optional[Mapping[Any, str]] = None,
    ) -> int:
        """Record one mark per student of the batch; unlisted students are PRESENT."""
        batch_timing = require_non_empty(batch_timing, "Batch")
        try:
            day = coerce_date(work_date)
        except (TypeError, ValueError):
            raise ValidationError("Invalid date (YYYY-MM-DD)")

        students = self._students_in_batch(batch_timing)
        known_ids = {s.student_id for s in students}

        chosen: dict[int, AttendanceStatus] = {}
        for raw_id, raw_status in (statuses or {}).items():
            try:
                sid = int(raw_id)
            except (TypeError, ValueError):
                raise ValidationError(f"Invalid student id: {raw_id!r}")
            if sid not in known_ids:
                raise ValidationError(f"Student {sid} is not in batch {batch_timing}")
            try:
                chosen[sid] = AttendanceStatus(str(raw_status).strip().upper())
            except ValueError:
                raise ValidationError(f"Invalid attendance status: {raw_status!r}")

        marks = [
            AttendanceMark(
                student_id=s.student_id,
                date=day.isoformat(),
                status=chosen.get(s.student_id, AttendanceStatus.PRESENT),
                batch_timing=batch_timing,
            )
            for s in students
        ]
        written = self._attendance.mark_many(marks)
        logger.info("Saved %s attendance marks for batch %s on %s", written, batch_timing, day.isoformat())
        return written

    def batch_history(
        self,
        *,
        work_date: Union[date, str],
        batch_timing: str,
        status_filter: Union[HistoryFilter, str, None] = HistoryFilter.ALL,
    ) -> HistoryView:
        batch_timing = require_non_empty(batch_timing, "Batch")
        try:
            day = coerce_date(work_date)
        except (TypeError, ValueError):
            raise ValidationError("Invalid date (YYYY-MM-DD)")
        rows = self._attendance.list_for_date_and_batch(day, batch_timing)
        return aggregate_batch_history(rows, status_filter)

    def student_history(self, student_id: int) -> list[AttendanceMark]:
        if not self._students.get_by_id(int(student_id)):
            raise NotFoundError(f"Student {student_id} not found")
        marks, _ = normalize_marks(self._attendance.list_for_student(int(student_id)))
        return sorted(marks, key=lambda m: m.date)

    def find_defaulters(self, batch_timing: str, *, threshold: Optional[int] = None) -> DefaulterReport:
        """Scan every student of a batch for absence runs.

        One bulk fetch, then an independent scan per student on a thread pool;
        results come back in the batch's student order.
        """
        batch_timing = require_non_empty(batch_timing, "Batch")
        threshold = self._threshold if threshold is None else int(threshold)
        if threshold < 1:
            raise ValidationError("Defaulter threshold must be at least 1")

        students = list(self._students.list_by_batch(batch_timing))
        if not students:
            return DefaulterReport(batch_timing=batch_timing, threshold=threshold, defaulters=[])

        marks_by_student = self._attendance.list_for_students([s.student_id for s in students])

        def scan(student: Student):
            result = scan_absences(marks_by_student.get(student.student_id, ()))
            return student, result

        with ThreadPoolExecutor(max_workers=min(self._max_workers, len(students))) as pool:
            scans: Sequence = list(pool.map(scan, students))

        defaulters: list[DefaulterRow] = []
        skipped = 0
        for student, result in scans:
            skipped += result.skipped
            view = defaulter_from_scan(student.student_id, result, threshold)
            if view is not None:
                defaulters.append(DefaulterRow(student=student, view=view))

        if skipped:
            logger.warning("Defaulter scan for batch %s skipped %s malformed marks", batch_timing, skipped)
        return DefaulterReport(
            batch_timing=batch_timing,
            threshold=threshold,
            defaulters=defaulters,
            skipped=skipped,
        )
