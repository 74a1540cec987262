from __future__ import annotations

from typing import TYPE_CHECKING

from payments_api.domain.entities import PaymentStatus
from payments_api.domain.exceptions import PaymentNotFoundError

if TYPE_CHECKING:
    from payments_api.application.ports import PaymentRepository
    from payments_api.domain.entities import Payment
    from payments_api.domain.value_objects import PaymentId


class GetPaymentUseCase:
    """Looks up a single payment by id."""

    def __init__(self, payment_repository: PaymentRepository) -> None:
        self._payment_repo = payment_repository

    def execute(self, payment_id: PaymentId) -> Payment:
        """Raises PaymentNotFoundError when the id is unknown."""
        payment = self._payment_repo.get(payment_id)
        if payment is None:
            raise PaymentNotFoundError(f"Payment not found: {payment_id.value}")
        return payment


class ListActivePaymentsUseCase:
    """Lists payments that have not been cancelled, oldest first."""

    def __init__(self, payment_repository: PaymentRepository) -> None:
        self._payment_repo = payment_repository

    def execute(self) -> list[Payment]:
        return self._payment_repo.list_by_status(PaymentStatus.ACTIVE)
