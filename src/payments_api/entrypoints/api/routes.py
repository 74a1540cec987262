"""API routes for recording, listing and cancelling payments."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, Request, status

from payments_api.domain.value_objects import PaymentId
from payments_api.entrypoints.api.dependencies import Container, get_container
from payments_api.entrypoints.api.schemas import (
    CreatePaymentBody,
    ErrorResponse,
    PaymentResponse,
)
from payments_api.infrastructure.ip_address import UNKNOWN_IP, is_localhost, resolve_client_ip

logger = structlog.get_logger(__name__)

payment_router = APIRouter(prefix="/payments", tags=["payments"])
monitoring_router = APIRouter(tags=["monitoring"])

_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
}


@payment_router.get(
    "",
    response_model=list[PaymentResponse],
    summary="List active payments",
    description="Payments that have not been cancelled, oldest first",
)
def list_payments(
    request: Request,
    container: Container = Depends(get_container),
) -> list[PaymentResponse]:
    _log_client_country(request, container)

    payments = container.list_active_payments.execute()
    logger.debug("active_payments_fetched", count=len(payments))
    return [PaymentResponse.from_entity(p) for p in payments]


@payment_router.get(
    "/{payment_id}",
    response_model=PaymentResponse,
    responses=_ERROR_RESPONSES,
    summary="Get a payment",
)
def get_payment(
    payment_id: str,
    container: Container = Depends(get_container),
) -> PaymentResponse:
    payment = container.get_payment.execute(PaymentId.from_string(payment_id))
    return PaymentResponse.from_entity(payment)


@payment_router.post(
    "",
    response_model=PaymentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
    summary="Record a payment",
)
def create_payment(
    body: CreatePaymentBody,
    container: Container = Depends(get_container),
) -> PaymentResponse:
    payment = container.create_payment.execute(body.to_request())
    return PaymentResponse.from_entity(payment)


@payment_router.put(
    "/{payment_id}",
    response_model=PaymentResponse,
    responses={
        **_ERROR_RESPONSES,
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
    summary="Cancel a payment",
    description="Same-day cancellation; the fee grows with every full hour since creation",
)
def cancel_payment(
    payment_id: str,
    container: Container = Depends(get_container),
) -> PaymentResponse:
    payment = container.cancel_payment.execute(PaymentId.from_string(payment_id))
    return PaymentResponse.from_entity(payment)


@monitoring_router.get("/health", summary="Liveness probe")
def health() -> dict[str, str]:
    return {"status": "ok"}


def _log_client_country(request: Request, container: Container) -> None:
    """Log where the listing request came from. Failures never reach the client."""
    try:
        client_ip = resolve_client_ip(
            request.headers, request.client.host if request.client else None
        )
        if client_ip == UNKNOWN_IP or is_localhost(client_ip):
            logger.debug("geoip_logging_skipped", client_ip=client_ip)
            return

        country = container.geo_locator.country_for(client_ip) or UNKNOWN_IP
        logger.info("payment_list_accessed", country=country, client_ip=client_ip)
    except Exception as e:
        logger.error("geoip_logging_failed", error=str(e), exc_info=True)
