"""Domain services - Stateless operations on domain objects."""

from payments_api.domain.services.cancellation import calendar_date, cancel_payment
from payments_api.domain.services.cancellation_fees import (
    FEE_RULES_BY_TYPE,
    CancellationFeeRule,
    select_fee_rule,
)

__all__ = [
    "FEE_RULES_BY_TYPE",
    "CancellationFeeRule",
    "calendar_date",
    "cancel_payment",
    "select_fee_rule",
]
