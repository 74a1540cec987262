from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

import structlog

from payments_api.domain.entities import Payment

if TYPE_CHECKING:
    from payments_api.application.ports import PaymentRepository, TimeProvider
    from payments_api.domain.value_objects import Currency

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CreatePaymentRequest:
    """Input DTO for create payment use case."""

    amount: Decimal
    currency: Currency
    debtor_iban: str
    creditor_iban: str
    type: int
    details: str | None = None
    bic_code: str | None = None


class CreatePaymentUseCase:
    """Records a new payment instruction.

    The creation date is taken from the TimeProvider, never from the
    request. The payment type is stored as given; see CancelPaymentUseCase.
    """

    def __init__(
        self,
        time_provider: TimeProvider,
        payment_repository: PaymentRepository,
    ) -> None:
        self._time_provider = time_provider
        self._payment_repo = payment_repository

    def execute(self, request: CreatePaymentRequest) -> Payment:
        payment = Payment.create(
            amount=request.amount,
            currency=request.currency,
            debtor_iban=request.debtor_iban,
            creditor_iban=request.creditor_iban,
            type=request.type,
            creation_date=self._time_provider.now(),
            details=request.details,
            bic_code=request.bic_code,
        )
        self._payment_repo.save(payment)

        logger.info(
            "payment_created",
            payment_id=str(payment.id),
            payment_type=payment.type,
            currency=payment.currency.value,
            amount=str(payment.amount),
        )
        return payment
