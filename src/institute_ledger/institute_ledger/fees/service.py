from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional

from ..common.datetime_utils import today_local
from ..core.enums import LedgerStatus, PaymentMethod
from ..core.exceptions import InvalidPayment, NotFoundError, ValidationError
from ..students.model import Student
from ..students.repository import StudentRepository
from .admission import admit_payment
from .factory import PaymentRuleFactory
from .ledger import compute_ledger, normalize_payments, suggest_late_fee
from .model import ZERO, CourseFeeSchedule, FeeLedgerView, PaymentEvent
from .receipt import PaymentReceipt, build_receipt
from .repository import PaymentRepository

logger = logging.getLogger(__name__)

ALL = "ALL"


@dataclass(frozen=True)
class FeeRecordRow:
    """Read-model for the fee records table: one student with its ledger."""

    student: Student
    ledger: FeeLedgerView

    def to_dict(self) -> dict:
        s = self.student
        data = self.ledger.to_dict()
        data.update(
            {
                "student_name": s.full_name,
                "course_name": s.course_name,
                "mobile_number": s.mobile_number,
                "admission_date": s.admission_date.isoformat() if s.admission_date else None,
            }
        )
        return data


@dataclass(frozen=True)
class FeeStats:
    pending: int
    partial: int
    paid: int
    overdue: int
    total_outstanding: Decimal
    skipped: int = 0

    def to_dict(self) -> dict:
        return {
            "pending": self.pending,
            "partial": self.partial,
            "paid": self.paid,
            "overdue": self.overdue,
            "total_outstanding": str(self.total_outstanding),
            "skipped": self.skipped,
        }


def summarize_ledgers(ledgers: Iterable[FeeLedgerView]) -> FeeStats:
    counts = {status: 0 for status in LedgerStatus}
    outstanding = ZERO
    skipped = 0
    for view in ledgers:
        counts[view.status] += 1
        if view.balance > 0:
            outstanding += view.balance
        skipped += view.skipped
    return FeeStats(
        pending=counts[LedgerStatus.PENDING],
        partial=counts[LedgerStatus.PARTIAL],
        paid=counts[LedgerStatus.PAID],
        overdue=counts[LedgerStatus.OVERDUE],
        total_outstanding=outstanding,
        skipped=skipped,
    )


def _parse_status_filter(value: Optional[str]) -> Optional[LedgerStatus]:
    v = (value or ALL).strip().upper()
    if v == ALL:
        return None
    try:
        return LedgerStatus(v)
    except ValueError:
        raise ValidationError(f"Unknown fee status filter: {value}")


def _matches_search(student: Student, term: str) -> bool:
    term = term.lower()
    return (
        term in student.full_name.lower()
        or term in str(student.student_id)
        or term in (student.mobile_number or "")
    )


class FeeService:
    """Use cases over the fee ledger: listing, payment defaults and recording."""

    def __init__(
        self,
        students: StudentRepository,
        payments: PaymentRepository,
        schedule: CourseFeeSchedule,
        *,
        rule_factory: Optional[PaymentRuleFactory] = None,
    ):
        self._students = students
        self._payments = payments
        self._schedule = schedule
        self._rules = rule_factory or PaymentRuleFactory()

    def _get_student(self, student_id: int) -> Student:
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise NotFoundError(f"Student {student_id} not found")
        return student

    def _ledger_for(self, student: Student, *, today: date) -> FeeLedgerView:
        return compute_ledger(
            student,
            self._schedule,
            self._payments.list_for_student(student.student_id),
            summary=self._payments.get_summary(student.student_id),
            today=today,
        )

    def get_ledger(self, student_id: int, *, today: Optional[date] = None) -> FeeLedgerView:
        student = self._get_student(student_id)
        return self._ledger_for(student, today=today or today_local())

    def list_fee_records(
        self,
        *,
        search: str = "",
        status: Optional[str] = ALL,
        course: Optional[str] = ALL,
        today: Optional[date] = None,
    ) -> list[FeeRecordRow]:
        today = today or today_local()
        status_filter = _parse_status_filter(status)
        course_filter = (course or ALL).strip()
        term = (search or "").strip()

        students = list(self._students.list_all())
        payments_by_student = self._payments.list_for_students([s.student_id for s in students])
        summaries = self._payments.list_summaries()

        rows: list[FeeRecordRow] = []
        for student in students:
            if course_filter != ALL and student.course_name != course_filter:
                continue
            if term and not _matches_search(student, term):
                continue
            ledger = compute_ledger(
                student,
                self._schedule,
                payments_by_student.get(student.student_id, ()),
                summary=summaries.get(student.student_id),
                today=today,
            )
            if status_filter is not None and ledger.status != status_filter:
                continue
            rows.append(FeeRecordRow(student=student, ledger=ledger))
        return rows

    def stats(self, *, today: Optional[date] = None) -> FeeStats:
        return summarize_ledgers(r.ledger for r in self.list_fee_records(today=today))

    def payment_history(self, student_id: int) -> list[PaymentEvent]:
        student = self._get_student(student_id)
        events, _ = normalize_payments(
            self._payments.list_for_student(student.student_id), student_id=student.student_id
        )
        return sorted(events, key=lambda p: p.payment_date)

    def payment_defaults(self, student_id: int, *, today: Optional[date] = None) -> dict:
        """Prefilled values for the record-payment form."""
        today = today or today_local()
        ledger = self.get_ledger(student_id, today=today)
        return {
            "student_id": ledger.student_id,
            "amount": str(max(ledger.balance, ZERO)),
            "payment_date": today.isoformat(),
            "payment_method": PaymentMethod.CASH.value,
            "transaction_id": "",
            "notes": "",
            "late_fee": str(suggest_late_fee(ledger.balance) if ledger.is_overdue else ZERO),
            "discount": "0",
        }

    def record_payment(self, student_id: int, candidate: Any, *, today: Optional[date] = None) -> PaymentReceipt:
        today = today or today_local()
        student = self._get_student(student_id)
        ledger = self._ledger_for(student, today=today)

        if isinstance(candidate, Mapping) and not candidate.get("payment_date"):
            candidate = {**candidate, "payment_date": today}

        try:
            event = admit_payment(candidate, ledger, rule_factory=self._rules)
        except InvalidPayment as e:
            logger.info("Rejected payment for student %s: %s", student.student_id, e.reason)
            raise

        payment_id = self._payments.create_payment(event)
        event = replace(event, payment_id=payment_id)
        logger.info(
            "Recorded payment %s for student %s: amount=%s method=%s",
            payment_id, student.student_id, event.amount, event.method.value,
        )
        return build_receipt(student, event)
