from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: an enrolled student (read-only for the engines)."""

    student_id: int
    first_name: str
    last_name: str
    course_name: str
    admission_date: Optional[date]
    middle_name: Optional[str] = None
    mobile_number: Optional[str] = None
    batch_timing: Optional[str] = None

    @property
    def full_name(self) -> str:
        parts = [self.first_name, self.middle_name, self.last_name]
        return " ".join(p.strip() for p in parts if p and p.strip())
