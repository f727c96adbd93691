from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Protocol, Sequence

from .model import AttendanceMark


class AttendanceRepository(Protocol):
    def mark_many(self, marks: Sequence[AttendanceMark]) -> int:
        """Insert or replace one mark per (student, date); returns rows written."""

        raise NotImplementedError

    def list_for_student(self, student_id: int) -> Sequence[Any]:
        raise NotImplementedError

    def list_for_students(self, student_ids: Sequence[int]) -> Mapping[int, Sequence[Any]]:
        raise NotImplementedError

    def list_for_date_and_batch(self, mark_date: date, batch_timing: str) -> Sequence[Any]:
        raise NotImplementedError
