"""Receipt figures for a recorded payment.

Only the numbers printed on a receipt live here (total collected, the total
spelled out in the Indian numbering system, a download file name); turning
them into a document is the presentation layer's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from ..students.model import Student
from .model import PaymentEvent

_ONES = (
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine",
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen",
    "Seventeen", "Eighteen", "Nineteen",
)
_TENS = ("", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety")

# (divisor, label), largest first.
_INDIAN_SCALES = ((10_000_000, "Crore"), (100_000, "Lakh"), (1_000, "Thousand"))


def _below_thousand(n: int) -> list[str]:
    words: list[str] = []
    if n >= 100:
        words += [_ONES[n // 100], "Hundred"]
        n %= 100
    if n >= 20:
        words.append(_TENS[n // 10])
        n %= 10
    if n > 0:
        words.append(_ONES[n])
    return words


def number_to_words(num: int) -> str:
    if num == 0:
        return "Zero"
    if num < 0:
        return "Negative " + number_to_words(-num)

    words: list[str] = []
    for divisor, label in _INDIAN_SCALES:
        if num >= divisor:
            chunk = num // divisor
            # Crores above 999 keep stacking on the crore label.
            words += (number_to_words(chunk).split() if chunk >= 1000 else _below_thousand(chunk)) + [label]
            num %= divisor
    words += _below_thousand(num)
    return " ".join(words)


def amount_to_words(amount: Decimal) -> str:
    amount = Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "Negative " if amount < 0 else ""
    amount = abs(amount)
    rupees = int(amount)
    paise = int((amount - rupees) * 100)

    text = f"Rupees {sign}{number_to_words(rupees)}"
    if paise > 0:
        text += f" and {number_to_words(paise)} Paise"
    return text + " Only"


@dataclass(frozen=True)
class PaymentReceipt:
    student_id: int
    student_name: str
    course_name: str
    payment: PaymentEvent
    total: Decimal
    amount_in_words: str
    file_name: str

    def to_dict(self) -> dict:
        p = self.payment
        return {
            "student_id": self.student_id,
            "student_name": self.student_name,
            "course_name": self.course_name,
            "payment_id": p.payment_id,
            "payment_date": p.payment_date.isoformat(),
            "method": p.method.value,
            "amount": str(p.amount),
            "late_fee": str(p.late_fee),
            "discount": str(p.discount),
            "total": str(self.total),
            "amount_in_words": self.amount_in_words,
            "file_name": self.file_name,
            "denominations": [
                {"value": d.value, "count": d.count, "serials": list(d.serials)} for d in p.denominations
            ],
        }


def build_receipt(student: Student, payment: PaymentEvent) -> PaymentReceipt:
    total = payment.collected_total
    return PaymentReceipt(
        student_id=student.student_id,
        student_name=student.full_name,
        course_name=student.course_name,
        payment=payment,
        total=total,
        amount_in_words=amount_to_words(total),
        file_name=(
            f"fee_receipt_{student.first_name}_{student.last_name}_"
            f"{payment.payment_date.strftime('%d_%b_%Y')}.html"
        ),
    )
