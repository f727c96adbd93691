from __future__ import annotations

import random
from datetime import date
from decimal import Decimal

import pytest

from src.institute_ledger.institute_ledger.core.enums import LedgerStatus
from src.institute_ledger.institute_ledger.fees.ledger import compute_ledger, suggest_late_fee
from src.institute_ledger.institute_ledger.fees.model import CourseFeeSchedule, FeeSummary, PaymentEvent
from src.institute_ledger.institute_ledger.students.model import Student

SCHEDULE = CourseFeeSchedule(fees={"MS-CIT": Decimal("3000"), "DTP - CIT": Decimal("2000")})


def make_student(*, admission=date(2026, 1, 20), course="MS-CIT", student_id=1) -> Student:
    return Student(
        student_id=student_id,
        first_name="Asha",
        last_name="Patil",
        course_name=course,
        admission_date=admission,
    )


def test_partial_payment_three_months_after_admission(fixed_today):
    ledger = compute_ledger(
        make_student(admission=date(2026, 1, 20)),
        SCHEDULE,
        [{"amount": 1000, "late_fee": 0, "discount": 0, "payment_date": "2026-02-01"}],
        today=fixed_today,
    )

    # Jan..Apr billed in full: 3000 x max(1, 3 + 1)
    assert ledger.total_due == Decimal("12000")
    assert ledger.total_paid == Decimal("1000")
    assert ledger.balance == Decimal("11000")
    assert ledger.status == LedgerStatus.PARTIAL
    assert ledger.is_overdue is True
    assert ledger.months_overdue == 3
    assert ledger.last_payment_date == date(2026, 2, 1)


def test_admitted_this_month_without_payments_is_pending(fixed_today):
    ledger = compute_ledger(make_student(admission=date(2026, 4, 30)), SCHEDULE, [], today=fixed_today)

    assert ledger.total_due == Decimal("3000")
    assert ledger.total_paid == Decimal("0")
    assert ledger.status == LedgerStatus.PENDING
    assert ledger.months_overdue == 0
    assert ledger.last_payment_date is None
    assert ledger.skipped == 0


def test_nothing_paid_after_months_elapsed_is_overdue(fixed_today):
    ledger = compute_ledger(make_student(admission=date(2026, 2, 1)), SCHEDULE, None, today=fixed_today)

    assert ledger.status == LedgerStatus.OVERDUE
    assert ledger.months_overdue == 2
    assert ledger.balance == Decimal("9000")


def test_full_and_over_payment_are_paid_and_balance_is_not_clamped(fixed_today):
    student = make_student(admission=date(2026, 4, 1))

    paid = compute_ledger(student, SCHEDULE, [{"amount": "3000", "payment_date": "2026-04-02"}], today=fixed_today)
    over = compute_ledger(student, SCHEDULE, [{"amount": "3500", "payment_date": "2026-04-02"}], today=fixed_today)

    assert paid.status == LedgerStatus.PAID
    assert paid.balance == Decimal("0")
    assert over.status == LedgerStatus.PAID
    assert over.balance == Decimal("-500")


def test_late_fee_and_discount_are_not_counted_as_paid(fixed_today):
    ledger = compute_ledger(
        make_student(admission=date(2026, 4, 1)),
        SCHEDULE,
        [{"amount": "1000", "late_fee": "100", "discount": "300", "payment_date": "2026-04-03"}],
        today=fixed_today,
    )

    assert ledger.total_paid == Decimal("1000")
    assert ledger.balance == Decimal("2000")


def test_precomputed_summary_due_is_authoritative(fixed_today):
    summary = FeeSummary(student_id=1, total_due=Decimal("7000"), months_overdue=1, last_payment_date=date(2025, 12, 1))
    ledger = compute_ledger(make_student(), SCHEDULE, [], summary=summary, today=fixed_today)

    assert ledger.total_due == Decimal("7000")
    assert ledger.balance == Decimal("7000")
    assert ledger.months_overdue == 1
    assert ledger.last_payment_date == date(2025, 12, 1)


def test_summary_without_due_falls_back_to_formula(fixed_today):
    summary = FeeSummary(student_id=1, total_due=None)
    ledger = compute_ledger(make_student(admission=date(2026, 4, 1)), SCHEDULE, [], summary=summary, today=fixed_today)

    assert ledger.total_due == Decimal("3000")


def test_unknown_course_uses_default_fee(fixed_today):
    ledger = compute_ledger(make_student(admission=date(2026, 4, 1), course="ROBOTICS"), SCHEDULE, [], today=fixed_today)

    assert ledger.course_fee == Decimal("2000")
    assert ledger.total_due == Decimal("2000")
    assert ledger.unknown_course is True


def test_malformed_payments_are_skipped_and_counted(fixed_today):
    payments = [
        {"amount": "abc", "payment_date": "2026-02-01"},
        {"payment_date": "2026-02-01"},
        {"amount": 500, "payment_date": "not-a-date"},
        {"amount": -10, "payment_date": "2026-02-01"},
        {"amount": 500, "payment_date": "2026-03-01"},
        "garbage",
    ]
    ledger = compute_ledger(make_student(), SCHEDULE, payments, today=fixed_today)

    assert ledger.skipped == 5
    assert ledger.total_paid == Decimal("500")
    assert ledger.status == LedgerStatus.PARTIAL


def test_payments_of_another_student_are_ignored(fixed_today):
    other = PaymentEvent(student_id=2, amount=Decimal("900"), payment_date=date(2026, 3, 1))
    ledger = compute_ledger(make_student(), SCHEDULE, [other], today=fixed_today)

    assert ledger.total_paid == Decimal("0")
    assert ledger.skipped == 1


def test_missing_admission_date_bills_one_month(fixed_today):
    ledger = compute_ledger(make_student(admission=None), SCHEDULE, [], today=fixed_today)

    assert ledger.total_due == Decimal("3000")
    assert ledger.status == LedgerStatus.PENDING


def test_compute_ledger_is_idempotent(fixed_today):
    student = make_student()
    payments = [{"amount": "1200.50", "payment_date": "2026-03-05"}, {"amount": "300", "payment_date": "2026-01-25"}]

    first = compute_ledger(student, SCHEDULE, payments, today=fixed_today)
    second = compute_ledger(student, SCHEDULE, payments, today=fixed_today)

    assert first == second
    assert first.last_payment_date == date(2026, 3, 5)


@pytest.mark.parametrize("seed", range(40))
def test_balance_and_status_invariants_hold_for_generated_histories(seed, fixed_today):
    rng = random.Random(seed)
    admission = date(rng.randint(2024, 2026), rng.randint(1, 4), rng.randint(1, 28))
    payments = [
        {
            "amount": rng.randint(0, 5000),
            "late_fee": rng.choice([0, 50, 100, 500]),
            "discount": rng.choice([0, 10, 250]),
            "payment_date": f"2026-0{rng.randint(1, 4)}-{rng.randint(1, 28):02d}",
        }
        for _ in range(rng.randint(0, 6))
    ]

    ledger = compute_ledger(make_student(admission=admission), SCHEDULE, payments, today=fixed_today)

    assert ledger.balance == ledger.total_due - ledger.total_paid
    assert (ledger.status == LedgerStatus.PAID) == (ledger.balance <= 0)
    if ledger.status == LedgerStatus.OVERDUE:
        assert ledger.total_paid == 0


@pytest.mark.parametrize(
    "balance, expected",
    [
        (Decimal("3000"), Decimal("300")),
        (Decimal("8000"), Decimal("500")),
        (Decimal("0"), Decimal("0")),
        (Decimal("-100"), Decimal("0")),
    ],
)
def test_suggest_late_fee(balance, expected):
    assert suggest_late_fee(balance) == expected
