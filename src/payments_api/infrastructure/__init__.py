"""Infrastructure layer - Concrete implementations of ports.

This layer contains:
- Persistence: In-memory payment repository
- External Services: IP geolocation over HTTP
- Time Provider: Clock abstraction for testability
- Locking: Per-payment locks serializing cancellations

Infrastructure adapters implement the ports defined in the application layer.
"""

from payments_api.infrastructure.geo_locator import HttpGeoLocator, NullGeoLocator
from payments_api.infrastructure.lock_provider import InMemoryLockProvider, NoOpLockProvider
from payments_api.infrastructure.payment_repository import InMemoryPaymentRepository
from payments_api.infrastructure.time_provider import FixedTimeProvider, SystemTimeProvider

__all__ = [
    "FixedTimeProvider",
    "HttpGeoLocator",
    "InMemoryLockProvider",
    "InMemoryPaymentRepository",
    "NoOpLockProvider",
    "NullGeoLocator",
    "SystemTimeProvider",
]
