"""Payment-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from payment_service.domain.payment import Payment


class CamelModel(BaseModel):
    """Base schema exchanging camelCase JSON with snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class PaymentDetails(CamelModel):
    """Raw payment instrument data. Never persisted as-is."""

    card_number: str | None = None
    card_holder: str | None = None
    expiry_month: str | None = None
    expiry_year: str | None = None
    cvv: str | None = None
    billing_address: str | None = None


class PaymentRequest(CamelModel):
    """Schema for submitting a payment.

    Field presence and format are checked by the payment service so that
    every caller gets the same field-level messages.
    """

    user_id: str | None = None
    amount: Decimal | None = None
    currency: str | None = None
    payment_method: str | None = None
    order_id: str | None = None
    details: PaymentDetails | None = None


class PaymentRecordResponse(CamelModel):
    """Schema for a stored payment in history listings."""

    id: str
    transaction_id: str
    user_id: str
    amount: Decimal
    currency: str
    payment_method: str
    order_id: str | None
    status: str
    failure_reason: str | None
    masked_details: str | None
    created_at: datetime
    updated_at: datetime | None

    @classmethod
    def from_payment(cls, payment: Payment) -> PaymentRecordResponse:
        return cls(
            id=str(payment.id),
            transaction_id=payment.transaction_id,
            user_id=payment.user_id,
            amount=payment.amount,
            currency=payment.currency,
            payment_method=payment.payment_method,
            order_id=payment.order_id,
            status=payment.status.value,
            failure_reason=payment.failure_reason,
            masked_details=payment.masked_details,
            created_at=payment.created_at,
            updated_at=payment.updated_at,
        )


class PaymentResponse(CamelModel):
    """Schema for the outcome of a payment operation."""

    success: bool
    message: str
    payment_id: str | None = None
    transaction_id: str | None = None
    status: str | None = None
    user_id: str | None = None
    amount: Decimal | None = None
    currency: str | None = None
    payment_method: str | None = None
    order_id: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_payment(cls, success: bool, message: str, payment: Payment) -> PaymentResponse:
        return cls(
            success=success,
            message=message,
            payment_id=str(payment.id) if payment.id else None,
            transaction_id=payment.transaction_id,
            status=payment.status.value,
            user_id=payment.user_id,
            amount=payment.amount,
            currency=payment.currency,
            payment_method=payment.payment_method,
            order_id=payment.order_id,
            created_at=payment.created_at,
        )


class PaymentHistoryResponse(BaseModel):
    """Schema for a user's payment history."""

    success: bool = True
    message: str = "Payment history retrieved successfully"
    data: list[PaymentRecordResponse]
