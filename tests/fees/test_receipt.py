from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.institute_ledger.institute_ledger.core.enums import PaymentMethod
from src.institute_ledger.institute_ledger.fees.model import PaymentEvent
from src.institute_ledger.institute_ledger.fees.receipt import amount_to_words, build_receipt, number_to_words
from src.institute_ledger.institute_ledger.students.model import Student


@pytest.mark.parametrize(
    "num, words",
    [
        (0, "Zero"),
        (7, "Seven"),
        (115, "One Hundred Fifteen"),
        (2500, "Two Thousand Five Hundred"),
        (1234567, "Twelve Lakh Thirty Four Thousand Five Hundred Sixty Seven"),
        (10000000, "One Crore"),
        (-40, "Negative Forty"),
    ],
)
def test_number_to_words_uses_indian_grouping(num, words):
    assert number_to_words(num) == words


def test_amount_to_words_spells_paise():
    assert amount_to_words(Decimal("1050.50")) == "Rupees One Thousand Fifty and Fifty Paise Only"
    assert amount_to_words(Decimal("3000")) == "Rupees Three Thousand Only"


def test_build_receipt_totals_late_fee_and_discount():
    student = Student(
        student_id=9,
        first_name="Ravi",
        middle_name="K",
        last_name="Deshmukh",
        course_name="MS-CIT",
        admission_date=date(2026, 1, 5),
    )
    payment = PaymentEvent(
        student_id=9,
        amount=Decimal("2000"),
        late_fee=Decimal("200"),
        discount=Decimal("100"),
        payment_date=date(2026, 4, 15),
        method=PaymentMethod.UPI,
        payment_id=31,
    )

    receipt = build_receipt(student, payment)

    assert receipt.total == Decimal("2100")
    assert receipt.student_name == "Ravi K Deshmukh"
    assert receipt.amount_in_words == "Rupees Two Thousand One Hundred Only"
    assert receipt.file_name == "fee_receipt_Ravi_Deshmukh_15_Apr_2026.html"
    assert receipt.to_dict()["payment_id"] == 31
