from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import PaymentMethod
from ..core.exceptions import InvalidPayment
from .strategies.base import PaymentMethodRule
from .strategies.cash_strategy import CashRule
from .strategies.cheque_strategy import ChequeRule
from .strategies.electronic_strategy import ElectronicRule


@dataclass
class PaymentRuleFactory:
    """Factory Pattern: choose the admission rule for a payment method."""

    def for_method(self, method: PaymentMethod) -> PaymentMethodRule:
        if method == PaymentMethod.CASH:
            return CashRule()
        if method == PaymentMethod.CHEQUE:
            return ChequeRule()
        if method in (PaymentMethod.CARD, PaymentMethod.UPI, PaymentMethod.BANK_TRANSFER):
            return ElectronicRule()
        raise InvalidPayment(f"Unsupported payment method: {method}")
