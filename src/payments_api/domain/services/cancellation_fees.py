"""Cancellation fee rules and the policy that selects them by payment type.

A fee is charged per full hour elapsed since the payment was created:

    fee = whole_hours(cancelled_at - creation_date) * coefficient

| type | coefficient |
|------|-------------|
| 1    | 0.05        |
| 2    | 0.10        |
| 3    | 0.15        |

Any other type has no rule and cancellation fails with
PaymentTypeIndeterminateError.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal
from typing import TYPE_CHECKING

import structlog

from payments_api.domain.exceptions import PaymentTypeIndeterminateError

if TYPE_CHECKING:
    from datetime import datetime

    from payments_api.domain.entities import Payment

logger = structlog.get_logger(__name__)

_ONE_HOUR = timedelta(hours=1)


@dataclass(frozen=True, slots=True)
class CancellationFeeRule:
    """Per-hour cancellation fee with a fixed decimal coefficient.

    Rules hold no mutable state; one instance can serve any number of
    concurrent cancellations.
    """

    coefficient: Decimal

    def calculate_fee(self, payment: Payment, cancelled_at: datetime) -> Decimal:
        """Compute the fee for cancelling ``payment`` at ``cancelled_at``.

        Elapsed time is truncated to whole hours, so 1h59m59s counts as one
        hour. A cancellation instant before the creation date (clock skew)
        is charged as zero hours and logged.
        """
        elapsed = cancelled_at - payment.creation_date
        hours = whole_hours(elapsed)

        if hours < 0:
            logger.warning(
                "cancellation_before_creation",
                payment_id=str(payment.id),
                creation_date=payment.creation_date.isoformat(),
                cancelled_at=cancelled_at.isoformat(),
                elapsed=str(elapsed),
            )
            hours = 0

        return Decimal(hours) * self.coefficient


def whole_hours(elapsed: timedelta) -> int:
    """Number of full hours in ``elapsed``, truncated toward zero."""
    full = abs(elapsed) // _ONE_HOUR
    return full if elapsed >= timedelta(0) else -full


TYPE_1_RULE = CancellationFeeRule(coefficient=Decimal("0.05"))
TYPE_2_RULE = CancellationFeeRule(coefficient=Decimal("0.10"))
TYPE_3_RULE = CancellationFeeRule(coefficient=Decimal("0.15"))

FEE_RULES_BY_TYPE: dict[int, CancellationFeeRule] = {
    1: TYPE_1_RULE,
    2: TYPE_2_RULE,
    3: TYPE_3_RULE,
}


def select_fee_rule(payment: Payment) -> CancellationFeeRule:
    """Return the cancellation fee rule for the payment's type.

    Raises:
        PaymentTypeIndeterminateError: If no rule is mapped to the type.
    """
    rule = FEE_RULES_BY_TYPE.get(payment.type)
    if rule is None:
        raise PaymentTypeIndeterminateError(
            payment_id=payment.id,
            payment_type=payment.type,
            currency=payment.currency,
            bic_present=payment.has_bic_code,
            details_present=payment.has_details,
        )
    return rule
