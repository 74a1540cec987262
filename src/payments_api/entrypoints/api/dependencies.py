"""Object graph for the API: adapters wired into use cases."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from fastapi import Request

from payments_api.application.use_cases import (
    CancelPaymentUseCase,
    CreatePaymentUseCase,
    GetPaymentUseCase,
    ListActivePaymentsUseCase,
)
from payments_api.infrastructure import (
    HttpGeoLocator,
    InMemoryLockProvider,
    InMemoryPaymentRepository,
    NullGeoLocator,
    SystemTimeProvider,
)

if TYPE_CHECKING:
    from datetime import tzinfo

    from payments_api.application.ports import (
        GeoLocator,
        LockProvider,
        PaymentRepository,
        TimeProvider,
    )
    from payments_api.config import Settings


@dataclass(frozen=True, slots=True)
class Container:
    """Use cases and the adapters they share, built once per application."""

    create_payment: CreatePaymentUseCase
    get_payment: GetPaymentUseCase
    list_active_payments: ListActivePaymentsUseCase
    cancel_payment: CancelPaymentUseCase
    geo_locator: GeoLocator

    @classmethod
    def build(
        cls,
        settings: Settings,
        payment_repository: PaymentRepository | None = None,
        time_provider: TimeProvider | None = None,
        lock_provider: LockProvider | None = None,
        geo_locator: GeoLocator | None = None,
    ) -> Container:
        """Wire the default adapters, letting callers swap any of them."""
        repository = (
            payment_repository if payment_repository is not None else InMemoryPaymentRepository()
        )
        clock = time_provider if time_provider is not None else SystemTimeProvider()
        locks = lock_provider if lock_provider is not None else InMemoryLockProvider()
        if geo_locator is None:
            geo_locator = _default_geo_locator(settings)
        business_timezone: tzinfo = settings.tzinfo

        return cls(
            create_payment=CreatePaymentUseCase(clock, repository),
            get_payment=GetPaymentUseCase(repository),
            list_active_payments=ListActivePaymentsUseCase(repository),
            cancel_payment=CancelPaymentUseCase(locks, clock, repository, business_timezone),
            geo_locator=geo_locator,
        )


def _default_geo_locator(settings: Settings) -> GeoLocator:
    if not settings.geoip_enabled:
        return NullGeoLocator()
    return HttpGeoLocator(
        url_template=settings.geoip_url_template,
        timeout_seconds=settings.geoip_timeout_seconds,
    )


def get_container(request: Request) -> Container:
    return request.app.state.container
