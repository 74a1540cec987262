from __future__ import annotations

from datetime import UTC, tzinfo
from typing import TYPE_CHECKING

import structlog

from payments_api.domain.exceptions import (
    CancellationNotAllowedError,
    PaymentNotFoundError,
    PaymentTypeIndeterminateError,
)
from payments_api.domain.services import cancel_payment

if TYPE_CHECKING:
    from payments_api.application.ports import (
        LockProvider,
        PaymentRepository,
        TimeProvider,
    )
    from payments_api.domain.entities import Payment
    from payments_api.domain.value_objects import PaymentId

logger = structlog.get_logger(__name__)


class CancelPaymentUseCase:
    """Orchestrates the cancel payment workflow.

    Responsibilities:
    - Acquire per-payment lock so only one cancellation can succeed
    - Fetch current time inside lock
    - Load the payment and run the cancellation workflow
    - Persist the cancelled payment

    Rejections leave the stored payment untouched.
    """

    def __init__(
        self,
        lock_provider: LockProvider,
        time_provider: TimeProvider,
        payment_repository: PaymentRepository,
        business_timezone: tzinfo = UTC,
    ) -> None:
        self._lock_provider = lock_provider
        self._time_provider = time_provider
        self._payment_repo = payment_repository
        self._business_timezone = business_timezone

    def execute(self, payment_id: PaymentId) -> Payment:
        """Cancel the payment identified by ``payment_id``.

        Returns:
            The cancelled payment, carrying its cancellation fee.

        Raises:
            PaymentNotFoundError: Payment does not exist.
            CancellationNotAllowedError: Not the creation day, or already cancelled.
            PaymentTypeIndeterminateError: No fee rule for the payment type.
        """
        with self._lock_provider.acquire(str(payment_id.value)):
            return self._execute_within_lock(payment_id)

    def _execute_within_lock(self, payment_id: PaymentId) -> Payment:
        now = self._time_provider.now()

        payment = self._payment_repo.get(payment_id)
        if payment is None:
            raise PaymentNotFoundError(f"Payment not found: {payment_id.value}")

        try:
            cancelled = cancel_payment(payment, now, self._business_timezone)
        except CancellationNotAllowedError as e:
            logger.info("payment_cancellation_rejected", payment_id=str(payment_id), reason=str(e))
            raise
        except PaymentTypeIndeterminateError as e:
            logger.error(
                "payment_type_indeterminate",
                payment_id=str(payment_id),
                payment_type=e.payment_type,
                currency=e.currency.value,
                bic_present=e.bic_present,
                details_present=e.details_present,
            )
            raise

        self._payment_repo.save(cancelled)

        logger.info(
            "payment_cancelled",
            payment_id=str(payment_id),
            payment_type=cancelled.type,
            fee=str(cancelled.cancellation),
        )
        return cancelled
