"""Pydantic schemas for API request/response models."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from payments_api.application.use_cases import CreatePaymentRequest
from payments_api.domain.entities import Payment
from payments_api.domain.value_objects import Currency

AMOUNT_PATTERN = r"^\d+(\.\d{1,2})?$"


class CreatePaymentBody(BaseModel):
    """Request schema for recording a payment."""

    amount: str = Field(
        ...,
        pattern=AMOUNT_PATTERN,
        description="Digits with up to two decimal places (e.g. 123.45)",
    )
    currency: Currency = Field(..., description="EUR or USD")
    debtor_iban: str = Field(..., min_length=1, description="Account debited")
    creditor_iban: str = Field(..., min_length=1, description="Account credited")
    details: str | None = Field(default=None, description="Free-text details")
    bic_code: str | None = Field(default=None, description="Bank identifier code")
    type: int = Field(default=1, description="Cancellation fee type (1, 2 or 3)")

    model_config = {
        "str_strip_whitespace": True,
        "json_schema_extra": {
            "examples": [
                {
                    "amount": "1000.00",
                    "currency": "EUR",
                    "debtor_iban": "DE89370400440532013000",
                    "creditor_iban": "FR1420041010050500013M02606",
                    "details": "Invoice 2024-001",
                    "bic_code": "COBADEFFXXX",
                    "type": 1,
                }
            ]
        },
    }

    @field_validator("currency", mode="before")
    @classmethod
    def normalize_currency(cls, v: object) -> object:
        return v.strip().upper() if isinstance(v, str) else v

    def to_request(self) -> CreatePaymentRequest:
        return CreatePaymentRequest(
            amount=Decimal(self.amount),
            currency=self.currency,
            debtor_iban=self.debtor_iban,
            creditor_iban=self.creditor_iban,
            type=self.type,
            details=self.details,
            bic_code=self.bic_code,
        )


class PaymentResponse(BaseModel):
    """Response schema for a payment. Monetary values are exact decimal strings."""

    id: str
    amount: str
    currency: Currency
    debtor_iban: str
    creditor_iban: str
    details: str | None
    bic_code: str | None
    type: int
    creation_date: datetime
    cancellation: str | None
    status: str

    @classmethod
    def from_entity(cls, payment: Payment) -> PaymentResponse:
        return cls(
            id=str(payment.id.value),
            amount=str(payment.amount),
            currency=payment.currency,
            debtor_iban=payment.debtor_iban,
            creditor_iban=payment.creditor_iban,
            details=payment.details,
            bic_code=payment.bic_code,
            type=payment.type,
            creation_date=payment.creation_date,
            cancellation=None if payment.cancellation is None else str(payment.cancellation),
            status=payment.status.value,
        )


class ErrorResponse(BaseModel):
    """Error body returned for every rejected request."""

    error: str
    message: str
