from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import FeeSummary, PaymentEvent


class PaymentRepository(Protocol):
    """Append-only payment log plus the precomputed fee summaries.

    Payment lists may hold raw mappings or PaymentEvent objects; the ledger
    engine normalizes them and skips malformed ones.
    """

    def list_for_student(self, student_id: int) -> Sequence[Any]:
        raise NotImplementedError

    def list_for_students(self, student_ids: Sequence[int]) -> Mapping[int, Sequence[Any]]:
        raise NotImplementedError

    def get_summary(self, student_id: int) -> Optional[FeeSummary]:
        raise NotImplementedError

    def list_summaries(self) -> Mapping[int, FeeSummary]:
        raise NotImplementedError

    def create_payment(self, event: PaymentEvent) -> int:
        raise NotImplementedError
