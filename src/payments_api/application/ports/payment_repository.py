from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from payments_api.domain.entities import Payment, PaymentStatus
    from payments_api.domain.value_objects import PaymentId


class PaymentRepository(ABC):
    """Storage for payment instructions.

    Contract:
    - get() of an unknown id yields None rather than raising
    - save() inserts or replaces the record keyed by payment.id
    - list_by_status() returns matches ordered by creation_date
    - Returned payments are detached from stored state

    Adapters do no locking of their own. CancelPaymentUseCase wraps each
    read-modify-write in LockProvider.acquire() for the payment id.
    """

    @abstractmethod
    def get(self, payment_id: PaymentId) -> Payment | None:
        """Stored payment for ``payment_id``, or None."""

    @abstractmethod
    def save(self, payment: Payment) -> None:
        """Insert or replace ``payment``."""

    @abstractmethod
    def list_by_status(self, status: PaymentStatus) -> list[Payment]:
        """Payments whose derived status equals ``status``, oldest first."""
