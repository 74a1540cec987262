"""Value objects - Immutable objects defined by their attributes."""

from payments_api.domain.value_objects.currency import Currency
from payments_api.domain.value_objects.payment_id import PaymentId

__all__ = [
    "Currency",
    "PaymentId",
]
