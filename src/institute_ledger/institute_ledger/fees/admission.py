from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import InvalidPayment, MalformedRecord
from .factory import PaymentRuleFactory
from .model import FeeLedgerView, PaymentEvent


def admit_payment(
    candidate: Any,
    ledger: FeeLedgerView,
    *,
    rule_factory: Optional[PaymentRuleFactory] = None,
) -> PaymentEvent:
    """Validate a candidate payment against the student's current ledger.

    Returns the normalized event to persist, or raises InvalidPayment. Nothing
    is recorded here; a rejected payment is never partially applied.
    """
    try:
        event = PaymentEvent.from_record(candidate, student_id=ledger.student_id)
    except MalformedRecord as e:
        raise InvalidPayment(str(e))

    if event.student_id != ledger.student_id:
        raise InvalidPayment("Payment belongs to a different student")

    balance = ledger.balance
    if event.amount > balance:
        raise InvalidPayment("Amount cannot exceed the balance due.")

    max_discount = min(balance, event.amount)
    if event.discount > max_discount:
        raise InvalidPayment(f"Discount cannot exceed {max_discount}")

    factory = rule_factory or PaymentRuleFactory()
    factory.for_method(event.method).check(event)
    return event
