"""Database models."""

from payment_service.models.payment import PaymentRecord

__all__ = [
    "PaymentRecord",
]
