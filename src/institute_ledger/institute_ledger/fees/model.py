from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional

from ..common.datetime_utils import coerce_date
from ..common.validators import optional_text, to_amount, to_count
from ..core.constants import DEFAULT_COURSE_FEE, SERIAL_TRACKED_DENOMINATION
from ..core.enums import LedgerStatus, PaymentMethod
from ..core.exceptions import MalformedRecord, ValidationError

ZERO = Decimal("0")


@dataclass(frozen=True)
class CourseFeeSchedule:
    """Static reference data: course name -> flat fee."""

    fees: Mapping[str, Decimal] = field(default_factory=dict)
    default_fee: Decimal = DEFAULT_COURSE_FEE

    def knows(self, course_name: Optional[str]) -> bool:
        return bool(course_name) and course_name in self.fees

    def fee_for(self, course_name: Optional[str]) -> Decimal:
        if self.knows(course_name):
            return Decimal(self.fees[course_name])
        return Decimal(self.default_fee)


@dataclass(frozen=True)
class CashDenomination:
    value: int
    count: int
    serials: tuple[str, ...] = ()

    @property
    def total(self) -> int:
        return self.value * self.count


@dataclass(frozen=True)
class PaymentEvent:
    """Domain entity: one recorded (or candidate) fee payment.

    Immutable once recorded; a student's payments are append-only.
    """

    student_id: int
    amount: Decimal
    payment_date: date
    method: PaymentMethod = PaymentMethod.CASH
    late_fee: Decimal = ZERO
    discount: Decimal = ZERO
    transaction_id: Optional[str] = None
    cheque_number: Optional[str] = None
    bank_name: Optional[str] = None
    notes: Optional[str] = None
    denominations: tuple[CashDenomination, ...] = ()
    payment_id: Optional[int] = None

    @property
    def collected_total(self) -> Decimal:
        """What actually changes hands: amount + late fee - discount."""
        return self.amount + self.late_fee - self.discount

    @property
    def denomination_total(self) -> int:
        return sum(d.total for d in self.denominations)

    @classmethod
    def from_record(cls, record: Any, *, student_id: Optional[int] = None) -> "PaymentEvent":
        """Normalize a storage/form record into a PaymentEvent.

        Raises MalformedRecord when a required field is missing or unparseable.
        """
        if isinstance(record, PaymentEvent):
            return record
        if not isinstance(record, Mapping):
            raise MalformedRecord(f"Unsupported payment record: {type(record).__name__}")

        try:
            sid = record.get("student_id", student_id)
            if sid is None:
                raise ValidationError("student_id is required")
            if record.get("payment_date") in (None, ""):
                raise ValidationError("payment_date is required")
            method_raw = record.get("method") or record.get("payment_method") or PaymentMethod.CASH.value
            return cls(
                student_id=int(sid),
                amount=to_amount(record.get("amount"), "amount"),
                payment_date=coerce_date(record["payment_date"]),
                method=PaymentMethod(str(method_raw).strip().upper()),
                late_fee=to_amount(record.get("late_fee"), "late_fee", default=ZERO),
                discount=to_amount(record.get("discount"), "discount", default=ZERO),
                transaction_id=optional_text(record.get("transaction_id")),
                cheque_number=optional_text(record.get("cheque_number")),
                bank_name=optional_text(record.get("bank_name")),
                notes=optional_text(record.get("notes")),
                denominations=_parse_denominations(record.get("denominations")),
                payment_id=int(record["payment_id"]) if record.get("payment_id") is not None else None,
            )
        except ValidationError as e:
            raise MalformedRecord(str(e))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise MalformedRecord(f"Invalid payment record: {e!r}")


def _parse_denominations(raw: Any) -> tuple[CashDenomination, ...]:
    if not raw:
        return ()
    lines = []
    for item in raw:
        value = int(item["value"])
        count = to_count(item.get("count"), f"count of {value} notes")
        if count == 0:
            continue
        serials: tuple[str, ...] = ()
        if value == SERIAL_TRACKED_DENOMINATION:
            serials = tuple(str(s).strip().upper() for s in item.get("serials") or () if str(s).strip())
        lines.append(CashDenomination(value=value, count=count, serials=serials))
    return tuple(lines)


@dataclass(frozen=True)
class FeeSummary:
    """Precomputed fee-summary record kept by storage (authoritative when present)."""

    student_id: int
    total_due: Optional[Decimal] = None
    total_paid: Optional[Decimal] = None
    balance: Optional[Decimal] = None
    status: Optional[LedgerStatus] = None
    is_overdue: Optional[bool] = None
    months_overdue: Optional[int] = None
    last_payment_date: Optional[date] = None


@dataclass(frozen=True)
class FeeLedgerView:
    """Derived, never persisted. Recomputed on every query."""

    student_id: int
    total_due: Decimal
    total_paid: Decimal
    balance: Decimal
    status: LedgerStatus
    months_overdue: int
    last_payment_date: Optional[date]
    is_overdue: bool = False
    months_since_admission: int = 0
    course_fee: Decimal = ZERO
    unknown_course: bool = False
    skipped: int = 0

    def to_dict(self) -> dict:
        return {
            "student_id": self.student_id,
            "total_due": str(self.total_due),
            "total_paid": str(self.total_paid),
            "balance": str(self.balance),
            "status": self.status.value,
            "is_overdue": self.is_overdue,
            "months_overdue": self.months_overdue,
            "last_payment_date": self.last_payment_date.isoformat() if self.last_payment_date else None,
            "course_fee": str(self.course_fee),
            "unknown_course": self.unknown_course,
            "skipped": self.skipped,
        }
