"""Use cases - One class per application operation."""

from payments_api.application.use_cases.cancel_payment import CancelPaymentUseCase
from payments_api.application.use_cases.create_payment import (
    CreatePaymentRequest,
    CreatePaymentUseCase,
)
from payments_api.application.use_cases.query_payments import (
    GetPaymentUseCase,
    ListActivePaymentsUseCase,
)

__all__ = [
    "CancelPaymentUseCase",
    "CreatePaymentRequest",
    "CreatePaymentUseCase",
    "GetPaymentUseCase",
    "ListActivePaymentsUseCase",
]
