from __future__ import annotations

from ...core.exceptions import InvalidPayment
from ..model import PaymentEvent
from .base import PaymentMethodRule


class ChequeRule(PaymentMethodRule):
    """Cheque: number and bank name are mandatory."""

    def check(self, event: PaymentEvent) -> None:
        if not event.cheque_number:
            raise InvalidPayment("Cheque number is required")
        if not event.bank_name:
            raise InvalidPayment("Bank name is required")
