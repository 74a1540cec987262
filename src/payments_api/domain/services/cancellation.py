"""Same-day cancellation workflow.

Rules are checked in a fixed order and the first violation wins:

1. The cancellation must fall on the payment's creation day.
2. The payment must not already be cancelled.
3. A fee rule must exist for the payment type.

Calendar days are compared in a business time zone. Aware datetimes are
converted into it; naive datetimes are taken to be business-local already.
Mixing the two is a caller error.
"""

from __future__ import annotations

from datetime import UTC, date, datetime, tzinfo
from typing import TYPE_CHECKING

from payments_api.domain.exceptions import CancellationNotAllowedError
from payments_api.domain.services.cancellation_fees import select_fee_rule

if TYPE_CHECKING:
    from payments_api.domain.entities import Payment


def cancel_payment(payment: Payment, now: datetime, tz: tzinfo = UTC) -> Payment:
    """Cancel ``payment`` at ``now`` and charge the applicable fee.

    Args:
        payment: Payment to cancel. Never modified.
        now: Cancellation instant.
        tz: Time zone that defines the calendar day.

    Returns:
        New Payment instance whose cancellation holds the fee.

    Raises:
        CancellationNotAllowedError: Different calendar day, or already cancelled.
        PaymentTypeIndeterminateError: No fee rule for the payment type.
        ValueError: The payment has no creation date, or only one of
            creation date and ``now`` carries a time zone.
    """
    if payment.creation_date is None:
        raise ValueError(f"Payment {payment.id.value} has no creation date")
    if _is_aware(payment.creation_date) != _is_aware(now):
        raise ValueError(
            f"Cannot compare creation date {payment.creation_date.isoformat()} with "
            f"cancellation instant {now.isoformat()}: one is naive, the other aware"
        )

    creation_day = calendar_date(payment.creation_date, tz)
    cancellation_day = calendar_date(now, tz)
    if creation_day != cancellation_day:
        raise CancellationNotAllowedError(
            "Payment can only be cancelled on the same day it was created. "
            f"Creation date: {creation_day.isoformat()}, "
            f"Attempted cancellation date: {cancellation_day.isoformat()}"
        )

    if payment.is_cancelled:
        raise CancellationNotAllowedError(
            f"Payment with ID {payment.id.value} has already been cancelled."
        )

    rule = select_fee_rule(payment)
    fee = rule.calculate_fee(payment, now)

    return payment.with_cancellation_fee(fee)


def calendar_date(moment: datetime, tz: tzinfo = UTC) -> date:
    """Calendar date of ``moment`` as seen in ``tz``."""
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone(tz).date()


def _is_aware(moment: datetime) -> bool:
    return moment.utcoffset() is not None
