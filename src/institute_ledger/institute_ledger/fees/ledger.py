"""Fee ledger derivation.

A student's ledger (due / paid / balance / status) is always derived from the
student record, the course fee schedule and the full list of that student's
payments. Nothing here is cached or persisted.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Optional

from ..common.datetime_utils import months_between, today_local
from ..core.constants import LATE_FEE_CAP, LATE_FEE_RATE
from ..core.enums import LedgerStatus
from ..core.exceptions import MalformedRecord
from ..students.model import Student
from .model import ZERO, CourseFeeSchedule, FeeLedgerView, FeeSummary, PaymentEvent

logger = logging.getLogger(__name__)


def normalize_payments(payments: Optional[Iterable[Any]], *, student_id: int) -> tuple[list[PaymentEvent], int]:
    """Return (valid payments for ``student_id``, number of skipped records)."""
    valid: list[PaymentEvent] = []
    skipped = 0
    for raw in payments or ():
        try:
            event = PaymentEvent.from_record(raw, student_id=student_id)
        except MalformedRecord as e:
            skipped += 1
            logger.warning("Skipping malformed payment record for student %s: %s", student_id, e)
            continue
        if event.student_id != student_id:
            skipped += 1
            logger.warning(
                "Skipping payment %s of student %s passed in for student %s",
                event.payment_id, event.student_id, student_id,
            )
            continue
        valid.append(event)
    return valid, skipped


def months_since_admission(student: Student, today: date) -> int:
    if student.admission_date is None:
        return 0
    return months_between(student.admission_date, today)


def derive_status(*, balance: Decimal, total_paid: Decimal, months_elapsed: int) -> LedgerStatus:
    # Anything paid wins over OVERDUE: overdue is reserved for students who paid nothing.
    if balance <= 0:
        return LedgerStatus.PAID
    if total_paid > 0:
        return LedgerStatus.PARTIAL
    if months_elapsed > 0:
        return LedgerStatus.OVERDUE
    return LedgerStatus.PENDING


def compute_ledger(
    student: Student,
    schedule: CourseFeeSchedule,
    payments: Optional[Iterable[Any]],
    *,
    summary: Optional[FeeSummary] = None,
    today: Optional[date] = None,
) -> FeeLedgerView:
    """Derive the FeeLedgerView of one student.

    ``total_due`` comes from the precomputed fee summary when it carries one;
    otherwise every calendar month since admission (the admission month
    included) is billed at the full course fee. Late fees and discounts are
    not part of ``total_paid``; ``balance`` is never clamped.
    """
    today = today or today_local()

    course_fee = schedule.fee_for(student.course_name)
    unknown_course = not schedule.knows(student.course_name)
    if unknown_course:
        logger.warning(
            "Unknown course %r for student %s, using default fee %s",
            student.course_name, student.student_id, course_fee,
        )

    months = months_since_admission(student, today)
    if summary is not None and summary.total_due is not None:
        total_due = Decimal(summary.total_due)
    else:
        total_due = course_fee * max(1, months + 1)

    valid, skipped = normalize_payments(payments, student_id=student.student_id)
    total_paid = sum((p.amount for p in valid), ZERO)
    balance = total_due - total_paid

    is_overdue = balance > 0 and months > 0
    months_overdue = 0
    if is_overdue:
        if summary is not None and summary.months_overdue is not None:
            months_overdue = int(summary.months_overdue)
        else:
            months_overdue = months

    if valid:
        last_payment_date = max(p.payment_date for p in valid)
    else:
        last_payment_date = summary.last_payment_date if summary is not None else None

    return FeeLedgerView(
        student_id=student.student_id,
        total_due=total_due,
        total_paid=total_paid,
        balance=balance,
        status=derive_status(balance=balance, total_paid=total_paid, months_elapsed=months),
        months_overdue=months_overdue,
        last_payment_date=last_payment_date,
        is_overdue=is_overdue,
        months_since_admission=max(months, 0),
        course_fee=course_fee,
        unknown_course=unknown_course,
        skipped=skipped,
    )


def suggest_late_fee(balance: Decimal) -> Decimal:
    """Default late fee offered for an overdue balance: 10%, capped at 500.

    A form default only; callers may override it.
    """
    if balance <= 0:
        return ZERO
    return min(LATE_FEE_CAP, balance * LATE_FEE_RATE)
