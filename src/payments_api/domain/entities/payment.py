"""Payment entity with cancellation state machine behavior.

State machine:
    - active → cancelled (with_cancellation_fee)
    - cancelled is terminal (no further transitions)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import TYPE_CHECKING

from payments_api.domain.exceptions import (
    CancellationNotAllowedError,
    InvalidAmountError,
    InvalidIbanError,
)
from payments_api.domain.value_objects import Currency, PaymentId

if TYPE_CHECKING:
    from datetime import datetime


class PaymentStatus(Enum):
    """Cancellation status of a payment, derived from its cancellation fee."""

    ACTIVE = "active"
    CANCELLED = "cancelled"


@dataclass(frozen=True, slots=True)
class Payment:
    """Payment instruction recorded by the API.

    Payment is immutable (frozen dataclass). Cancelling returns a new
    Payment instance carrying the fee, so a rejected cancellation can
    never leave a half-updated payment behind.

    ``type`` is stored as given. Only the cancellation workflow decides
    whether a fee rule exists for it.

    Use the create() factory method to construct instances with validation.
    """

    id: PaymentId
    amount: Decimal
    currency: Currency
    debtor_iban: str
    creditor_iban: str
    details: str | None
    bic_code: str | None
    type: int
    creation_date: datetime
    cancellation: Decimal | None = None

    @classmethod
    def create(
        cls,
        amount: Decimal | str,
        currency: Currency | str,
        debtor_iban: str,
        creditor_iban: str,
        type: int,  # noqa: A002
        creation_date: datetime,
        details: str | None = None,
        bic_code: str | None = None,
    ) -> Payment:
        """Factory method to record a new payment with validation.

        Args:
            amount: Exact decimal amount (Decimal or decimal string), > 0.
            currency: Currency or ISO code.
            debtor_iban: Account the payment is taken from.
            creditor_iban: Account the payment is sent to.
            type: Payment type code; not validated here.
            creation_date: Creation instant (UTC).
            details: Optional free-text description.
            bic_code: Optional bank identifier code.

        Returns:
            A new, active Payment with a generated id.

        Raises:
            InvalidAmountError: If amount is not a finite positive decimal.
            InvalidCurrencyError: If currency is not supported.
            InvalidIbanError: If either IBAN is blank.
        """
        if not isinstance(currency, Currency):
            currency = Currency.from_code(currency)

        for label, iban in (("debtor", debtor_iban), ("creditor", creditor_iban)):
            if not iban or not iban.strip():
                raise InvalidIbanError(f"The {label} IBAN cannot be empty")

        return cls(
            id=PaymentId.generate(),
            amount=_parse_amount(amount),
            currency=currency,
            debtor_iban=debtor_iban.strip(),
            creditor_iban=creditor_iban.strip(),
            details=details,
            bic_code=bic_code,
            type=type,
            creation_date=creation_date,
            cancellation=None,
        )

    @property
    def status(self) -> PaymentStatus:
        if self.cancellation is None:
            return PaymentStatus.ACTIVE
        return PaymentStatus.CANCELLED

    @property
    def is_cancelled(self) -> bool:
        return self.cancellation is not None

    @property
    def has_bic_code(self) -> bool:
        return bool(self.bic_code and self.bic_code.strip())

    @property
    def has_details(self) -> bool:
        return bool(self.details and self.details.strip())

    def with_cancellation_fee(self, fee: Decimal) -> Payment:
        """Cancel the payment, recording the cancellation fee.

        Args:
            fee: Non-negative cancellation fee.

        Returns:
            New Payment instance in CANCELLED status.

        Raises:
            CancellationNotAllowedError: If the payment is already cancelled.

        Note:
            This method does NOT check the same-day rule or resolve the fee.
            cancel_payment() owns the eligibility checks and their order.
        """
        if self.is_cancelled:
            raise CancellationNotAllowedError(
                f"Payment with ID {self.id.value} has already been cancelled."
            )

        return replace(self, cancellation=fee)


def _parse_amount(amount: Decimal | str) -> Decimal:
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount).strip())
    except InvalidOperation as e:
        raise InvalidAmountError(f"Invalid amount: {amount!r}") from e

    if not value.is_finite() or value <= 0:
        raise InvalidAmountError(f"Payment amount must be greater than 0, got {amount}")

    return value
