from __future__ import annotations

from ..model import PaymentEvent
from .base import PaymentMethodRule


class ElectronicRule(PaymentMethodRule):
    """Card / UPI / bank transfer: transaction id is optional, nothing else to check."""

    def check(self, event: PaymentEvent) -> None:
        return None
