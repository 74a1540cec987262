"""Shared pytest fixtures for the test suite."""

from collections.abc import Callable
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

import pytest

from payments_api.domain.entities import Payment
from payments_api.domain.value_objects import Currency, PaymentId
from payments_api.infrastructure.lock_provider import InMemoryLockProvider
from payments_api.infrastructure.time_provider import FixedTimeProvider

PaymentFactory = Callable[..., Payment]


@pytest.fixture
def fixed_time() -> datetime:
    """A fixed timestamp for deterministic testing."""
    return datetime(2024, 1, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def time_provider(fixed_time: datetime) -> FixedTimeProvider:
    """A time provider with a fixed timestamp."""
    return FixedTimeProvider(fixed_time)


@pytest.fixture
def lock_provider() -> InMemoryLockProvider:
    """An in-memory lock provider for testing."""
    return InMemoryLockProvider()


@pytest.fixture
def make_payment(fixed_time: datetime) -> PaymentFactory:
    """Build an active payment; any field can be overridden by keyword."""

    def factory(**overrides: Any) -> Payment:
        fields: dict[str, Any] = {
            "id": PaymentId.generate(),
            "amount": Decimal("1000.00"),
            "currency": Currency.EUR,
            "debtor_iban": "DE89370400440532013000",
            "creditor_iban": "FR1420041010050500013M02606",
            "details": None,
            "bic_code": None,
            "type": 1,
            "creation_date": fixed_time,
            "cancellation": None,
        }
        fields.update(overrides)
        return Payment(**fields)

    return factory
