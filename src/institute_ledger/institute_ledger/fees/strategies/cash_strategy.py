from __future__ import annotations

from ...core.constants import CASH_DENOMINATIONS
from ...core.exceptions import InvalidPayment
from ..model import PaymentEvent
from .base import PaymentMethodRule


class CashRule(PaymentMethodRule):
    """Cash: the counted notes must add up to amount + late fee - discount."""

    def __init__(self, denominations: tuple[int, ...] = CASH_DENOMINATIONS):
        self._denominations = frozenset(denominations)

    def check(self, event: PaymentEvent) -> None:
        for line in event.denominations:
            if line.value not in self._denominations:
                raise InvalidPayment(f"Unsupported denomination: {line.value}")
            if len(line.serials) > line.count:
                raise InvalidPayment(f"More serial numbers than {line.value} notes")

        expected = event.collected_total
        counted = event.denomination_total
        if counted != expected:
            raise InvalidPayment(
                f"Denomination total ({counted}) does not match the expected total ({expected})."
            )
