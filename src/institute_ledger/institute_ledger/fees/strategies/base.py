from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import PaymentEvent


class PaymentMethodRule(ABC):
    """Strategy Pattern: method-specific checks applied when admitting a payment."""

    @abstractmethod
    def check(self, event: PaymentEvent) -> None:
        """Raise InvalidPayment when ``event`` is not acceptable for this method."""
        raise NotImplementedError
