"""Domain exceptions for payments-api.

Exception hierarchy:
    DomainException (base)
    ├── Cancellation Errors
    │   ├── CancellationNotAllowedError (business rule, HTTP 409)
    │   └── PaymentTypeIndeterminateError (data/policy gap, HTTP 422)
    ├── Not Found Errors
    │   └── PaymentNotFoundError
    └── Validation Errors
        ├── InvalidPaymentIdError
        ├── InvalidAmountError
        ├── InvalidCurrencyError
        └── InvalidIbanError

Entrypoints translate these into HTTP responses; nothing in the domain
knows about status codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from payments_api.domain.value_objects import Currency, PaymentId


class DomainException(Exception):
    """Base exception for all domain-level errors.

    All domain exceptions inherit from this class to enable
    catching domain errors distinctly from infrastructure errors.
    """


# =============================================================================
# Cancellation Errors
# =============================================================================


class CancellationNotAllowedError(DomainException):
    """Raised when a cancellation attempt violates an eligibility rule.

    Two rules are enforced, in this order:
        - the attempt must fall on the payment's creation day
        - the payment must not already carry a cancellation fee

    The payment is left untouched. Retrying with the same payment yields
    the same error, so callers should surface it as a rejected request.
    """


class PaymentTypeIndeterminateError(DomainException):
    """Raised when no cancellation fee rule is mapped to a payment type.

    Payments accept any integer type at creation time; the type is only
    checked when a fee has to be computed. The attributes describe the
    offending payment so the failure can be investigated from logs alone.
    """

    def __init__(
        self,
        payment_id: PaymentId,
        payment_type: int,
        currency: Currency,
        bic_present: bool,
        details_present: bool,
    ) -> None:
        self.payment_id = payment_id
        self.payment_type = payment_type
        self.currency = currency
        self.bic_present = bic_present
        self.details_present = details_present
        super().__init__(
            "Could not determine payment type for cancellation fee calculation "
            f"for payment ID: {payment_id.value}. Type: {payment_type}, "
            f"Currency: {currency.value}, BIC present: {bic_present}, "
            f"Details present: {details_present}"
        )


# =============================================================================
# Not Found Errors
# =============================================================================


class PaymentNotFoundError(DomainException):
    """Raised when a payment cannot be found by ID.

    This is a client error (HTTP 404) indicating the requested
    payment does not exist.
    """


# =============================================================================
# Validation Errors
# =============================================================================


class InvalidPaymentIdError(DomainException):
    """Raised when a payment ID is not a valid UUID."""


class InvalidAmountError(DomainException):
    """Raised when a payment amount is missing, inexact or not positive."""


class InvalidCurrencyError(DomainException):
    """Raised when a currency code is outside the supported set."""


class InvalidIbanError(DomainException):
    """Raised when a debtor or creditor IBAN is blank."""
