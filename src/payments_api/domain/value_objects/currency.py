from __future__ import annotations

from enum import Enum

from payments_api.domain.exceptions import InvalidCurrencyError


class Currency(Enum):
    """Currencies a payment may be denominated in."""

    EUR = "EUR"
    USD = "USD"

    @classmethod
    def from_code(cls, code: str) -> Currency:
        """Parse an ISO currency code (case-insensitive, whitespace trimmed).

        Raises:
            InvalidCurrencyError: If the code is not EUR or USD.
        """
        normalized = code.strip().upper() if isinstance(code, str) else code
        try:
            return cls(normalized)
        except ValueError as e:
            allowed = ", ".join(member.value for member in cls)
            raise InvalidCurrencyError(
                f"Unsupported currency: {code}; allowed: {allowed}"
            ) from e
