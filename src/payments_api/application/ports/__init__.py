"""Ports - Abstract interfaces for external dependencies.

Ports define the contracts that infrastructure adapters must implement.
This allows the application layer to remain decoupled from concrete implementations.
"""

from payments_api.application.ports.geo_locator import GeoLocator
from payments_api.application.ports.lock_provider import LockProvider
from payments_api.application.ports.payment_repository import PaymentRepository
from payments_api.application.ports.time_provider import TimeProvider

__all__ = [
    "GeoLocator",
    "LockProvider",
    "PaymentRepository",
    "TimeProvider",
]
