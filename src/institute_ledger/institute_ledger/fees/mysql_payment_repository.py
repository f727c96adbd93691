from __future__ import annotations

import json
import logging
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Sequence

from ..core.enums import LedgerStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import FeeSummary, PaymentEvent
from .repository import PaymentRepository

logger = logging.getLogger(__name__)

_PAYMENT_COLUMNS = """
    payment_id, student_id, amount, late_fee, discount, payment_date, method,
    transaction_id, cheque_number, bank_name, notes, denominations
"""

_SUMMARY_COLUMNS = """
    student_id, total_due, total_paid, balance, status, is_overdue,
    months_overdue, last_payment_date
"""


def _decode_payment(r: Dict[str, Any]) -> Dict[str, Any]:
    row = dict(r)
    raw = row.get("denominations")
    if isinstance(raw, (bytes, str)) and raw:
        try:
            row["denominations"] = json.loads(raw)
        except ValueError:
            logger.warning("Unreadable denominations on payment %s", row.get("payment_id"))
            row["denominations"] = None
    return row


def _to_summary(r: Dict[str, Any]) -> FeeSummary:
    def dec(key: str) -> Optional[Decimal]:
        v = r.get(key)
        return Decimal(str(v)) if v is not None else None

    try:
        status = LedgerStatus(r.get("status"))
    except ValueError:
        status = None
    is_overdue = r.get("is_overdue")
    months_overdue = r.get("months_overdue")
    return FeeSummary(
        student_id=int(r["student_id"]),
        total_due=dec("total_due"),
        total_paid=dec("total_paid"),
        balance=dec("balance"),
        status=status,
        is_overdue=bool(is_overdue) if is_overdue is not None else None,
        months_overdue=int(months_overdue) if months_overdue is not None else None,
        last_payment_date=r.get("last_payment_date"),
    )


class MySQLPaymentRepository(PaymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_student(self, student_id: int) -> Sequence[Any]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_PAYMENT_COLUMNS} FROM fee_payments WHERE student_id=%s ORDER BY payment_date ASC, payment_id ASC",
                (int(student_id),),
            )
            return [_decode_payment(r) for r in fetchall(cur)]

    def list_for_students(self, student_ids: Sequence[int]) -> Mapping[int, Sequence[Any]]:
        out: Dict[int, list] = {int(sid): [] for sid in student_ids}
        if not out:
            return out
        placeholders = ",".join(["%s"] * len(out))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_PAYMENT_COLUMNS} FROM fee_payments
                WHERE student_id IN ({placeholders})
                ORDER BY payment_date ASC, payment_id ASC
                """,
                tuple(out.keys()),
            )
            for r in fetchall(cur):
                out[int(r["student_id"])].append(_decode_payment(r))
        return out

    def get_summary(self, student_id: int) -> Optional[FeeSummary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_SUMMARY_COLUMNS} FROM fee_summaries WHERE student_id=%s", (int(student_id),))
            r = fetchone(cur)
            return _to_summary(r) if r else None

    def list_summaries(self) -> Mapping[int, FeeSummary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_SUMMARY_COLUMNS} FROM fee_summaries")
            return {int(r["student_id"]): _to_summary(r) for r in fetchall(cur)}

    def create_payment(self, event: PaymentEvent) -> int:
        denominations = [
            {"value": d.value, "count": d.count, "serials": list(d.serials)} for d in event.denominations
        ]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO fee_payments(
                    student_id, amount, late_fee, discount, payment_date, method,
                    transaction_id, cheque_number, bank_name, notes, denominations
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    event.student_id,
                    event.amount,
                    event.late_fee,
                    event.discount,
                    event.payment_date,
                    event.method.value,
                    event.transaction_id,
                    event.cheque_number,
                    event.bank_name,
                    event.notes,
                    json.dumps(denominations) if denominations else None,
                ),
            )
            return int(cur.lastrowid)
