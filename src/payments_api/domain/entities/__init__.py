"""Domain entities - Objects with identity and lifecycle."""

from payments_api.domain.entities.payment import Payment, PaymentStatus

__all__ = [
    "Payment",
    "PaymentStatus",
]
