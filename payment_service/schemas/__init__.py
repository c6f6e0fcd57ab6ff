"""Pydantic schemas for API validation."""

from payment_service.schemas.payment import (
    PaymentDetails,
    PaymentHistoryResponse,
    PaymentRecordResponse,
    PaymentRequest,
    PaymentResponse,
)

__all__ = [
    "PaymentDetails",
    "PaymentHistoryResponse",
    "PaymentRecordResponse",
    "PaymentRequest",
    "PaymentResponse",
]
