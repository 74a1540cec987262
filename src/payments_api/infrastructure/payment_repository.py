from __future__ import annotations

import copy
from typing import TYPE_CHECKING

from payments_api.application.ports import PaymentRepository

if TYPE_CHECKING:
    from payments_api.domain.entities import Payment, PaymentStatus
    from payments_api.domain.value_objects import PaymentId


class InMemoryPaymentRepository(PaymentRepository):
    """In-memory payment repository for tests and single-process deployments.

    Implementation notes:
    - Uses dict with PaymentId as key (requires frozen dataclass)
    - Returns deep copies from get() and list_by_status() to mimic database detachment
    - Stores deep copies in save() to prevent external mutation
    - NOT thread-safe; relies on external LockProvider for serialization

    Copy-on-read rationale:
    Returning copies catches bugs where code cancels a payment without
    calling save(). Payments are frozen, but their Decimal and datetime
    fields are still copied so stored state is fully detached.
    """

    def __init__(self) -> None:
        self._payments: dict[PaymentId, Payment] = {}

    def get(self, payment_id: PaymentId) -> Payment | None:
        payment = self._payments.get(payment_id)
        if payment is None:
            return None
        return copy.deepcopy(payment)

    def save(self, payment: Payment) -> None:
        self._payments[payment.id] = copy.deepcopy(payment)

    def list_by_status(self, status: PaymentStatus) -> list[Payment]:
        matching = [p for p in self._payments.values() if p.status == status]
        matching.sort(key=lambda p: p.creation_date)
        return [copy.deepcopy(p) for p in matching]

    def __len__(self) -> int:
        return len(self._payments)
