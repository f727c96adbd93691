from __future__ import annotations

from datetime import date
from typing import Any, Dict, Mapping, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceMark
from .repository import AttendanceRepository


def _to_record(r: Dict[str, Any]) -> Dict[str, Any]:
    # Dates leave storage as ISO strings so the analyzer can order them lexicographically.
    mark_date = r.get("mark_date")
    return {
        "student_id": r.get("student_id"),
        "student_name": r.get("student_name"),
        "date": mark_date.isoformat() if isinstance(mark_date, date) else mark_date,
        "batch_timing": r.get("batch_timing"),
        "status": r.get("status"),
    }


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def mark_many(self, marks: Sequence[AttendanceMark]) -> int:
        if not marks:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO attendance_marks(student_id, mark_date, batch_timing, status)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE batch_timing=VALUES(batch_timing), status=VALUES(status)
                """,
                [(m.student_id, m.date, m.batch_timing, m.status.value) for m in marks],
            )
            return len(marks)

    def list_for_student(self, student_id: int) -> Sequence[Any]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT student_id, mark_date, batch_timing, status
                FROM attendance_marks
                WHERE student_id=%s
                ORDER BY mark_date ASC
                """,
                (int(student_id),),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_students(self, student_ids: Sequence[int]) -> Mapping[int, Sequence[Any]]:
        out: Dict[int, list] = {int(sid): [] for sid in student_ids}
        if not out:
            return out
        placeholders = ",".join(["%s"] * len(out))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT student_id, mark_date, batch_timing, status
                FROM attendance_marks
                WHERE student_id IN ({placeholders})
                ORDER BY mark_date ASC
                """,
                tuple(out.keys()),
            )
            for r in fetchall(cur):
                out[int(r["student_id"])].append(_to_record(r))
        return out

    def list_for_date_and_batch(self, mark_date: date, batch_timing: str) -> Sequence[Any]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    am.student_id,
                    CONCAT_WS(' ', s.first_name, NULLIF(s.middle_name, ''), s.last_name) AS student_name,
                    am.mark_date, am.batch_timing, am.status
                FROM attendance_marks am
                JOIN students s ON s.student_id = am.student_id
                WHERE am.mark_date=%s AND am.batch_timing=%s
                ORDER BY am.student_id ASC
                """,
                (mark_date, batch_timing),
            )
            return [_to_record(r) for r in fetchall(cur)]
