"""Translation of domain exceptions into HTTP error responses."""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from payments_api.domain.exceptions import (
    CancellationNotAllowedError,
    DomainException,
    InvalidAmountError,
    InvalidCurrencyError,
    InvalidIbanError,
    InvalidPaymentIdError,
    PaymentNotFoundError,
    PaymentTypeIndeterminateError,
)

logger = structlog.get_logger(__name__)

STATUS_BY_EXCEPTION: dict[type[DomainException], int] = {
    CancellationNotAllowedError: status.HTTP_409_CONFLICT,
    PaymentTypeIndeterminateError: 422,
    PaymentNotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidPaymentIdError: status.HTTP_400_BAD_REQUEST,
    InvalidAmountError: status.HTTP_400_BAD_REQUEST,
    InvalidCurrencyError: status.HTTP_400_BAD_REQUEST,
    InvalidIbanError: status.HTTP_400_BAD_REQUEST,
}


def status_for(exc: DomainException) -> int:
    for exc_type in type(exc).__mro__:
        if exc_type in STATUS_BY_EXCEPTION:
            return STATUS_BY_EXCEPTION[exc_type]
    return status.HTTP_400_BAD_REQUEST


def error_body(error: str, message: str) -> dict[str, str]:
    return {"error": error, "message": message}


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    status_code = status_for(exc)
    logger.info(
        "request_rejected",
        error_type=type(exc).__name__,
        status_code=status_code,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status_code,
        content=error_body(type(exc).__name__, str(exc)),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    ]
    logger.info("request_validation_failed", path=request.url.path, errors=messages)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("ValidationError", "; ".join(messages) or "Invalid request"),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(
            "InternalServerError", "An unexpected error occurred. Please try again later."
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
