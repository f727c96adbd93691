from __future__ import annotations

from enum import Enum


class LedgerStatus(str, Enum):
    """Derived fee status of one student."""

    PENDING = "PENDING"
    PARTIAL = "PARTIAL"
    PAID = "PAID"
    OVERDUE = "OVERDUE"


class PaymentMethod(str, Enum):
    CASH = "CASH"
    CARD = "CARD"
    UPI = "UPI"
    BANK_TRANSFER = "BANK_TRANSFER"
    CHEQUE = "CHEQUE"


class AttendanceStatus(str, Enum):
    """Daily attendance mark stored per (student, date)."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"


class HistoryFilter(str, Enum):
    """Status filter for the per-date batch history table."""

    ALL = "ALL"
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
