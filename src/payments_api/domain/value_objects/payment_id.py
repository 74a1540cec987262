from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID, uuid4

from payments_api.domain.exceptions import InvalidPaymentIdError


@dataclass(frozen=True, slots=True)
class PaymentId:
    """Identifier assigned to a payment when it is recorded (UUID4)."""

    value: UUID

    @classmethod
    def generate(cls) -> PaymentId:
        return cls(value=uuid4())

    @classmethod
    def from_string(cls, raw: str) -> PaymentId:
        """Parse the path-parameter form of an id.

        Hyphens are optional and hex digits may be upper case; surrounding
        whitespace is ignored.

        Raises:
            InvalidPaymentIdError: ``raw`` is not a UUID.
        """
        try:
            return cls(value=UUID(raw.strip()))
        except (ValueError, AttributeError, TypeError) as e:
            raise InvalidPaymentIdError(f"Invalid payment ID: {raw}") from e

    def __str__(self) -> str:
        return str(self.value)
