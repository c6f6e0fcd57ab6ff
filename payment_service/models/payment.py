"""Payment database model."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import DateTime, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from payment_service.database import Base
from payment_service.domain.payment import (
    AMOUNT_PRECISION,
    AMOUNT_SCALE,
    CURRENCY_LENGTH,
    ORDER_ID_MAX_LENGTH,
    PAYMENT_METHOD_MAX_LENGTH,
    USER_ID_MAX_LENGTH,
    Payment,
    PaymentStatus,
)


def _as_utc(value: datetime | None) -> datetime | None:
    """SQLite drops the offset on read; stored values are always UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class PaymentRecord(Base):
    """Persisted payment attempt."""

    __tablename__ = "payments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    transaction_id: Mapped[str] = mapped_column(
        String(64), nullable=False, unique=True, index=True
    )
    user_id: Mapped[str] = mapped_column(String(USER_ID_MAX_LENGTH), nullable=False, index=True)
    order_id: Mapped[str | None] = mapped_column(String(ORDER_ID_MAX_LENGTH), index=True)

    # Amount
    amount: Mapped[Decimal] = mapped_column(Numeric(AMOUNT_PRECISION, AMOUNT_SCALE), nullable=False)
    currency: Mapped[str] = mapped_column(String(CURRENCY_LENGTH), nullable=False)

    # Method
    payment_method: Mapped[str] = mapped_column(String(PAYMENT_METHOD_MAX_LENGTH), nullable=False)
    masked_details: Mapped[str | None] = mapped_column(Text)  # never raw card data

    # Status
    status: Mapped[str] = mapped_column(String(20), nullable=False)  # SUCCESS, FAILED, REFUNDED
    failure_reason: Mapped[str | None] = mapped_column(Text)

    # Optimistic concurrency
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    @classmethod
    def from_domain(cls, payment: Payment) -> PaymentRecord:
        return cls(
            id=payment.id or uuid.uuid4(),
            transaction_id=payment.transaction_id,
            user_id=payment.user_id,
            order_id=payment.order_id,
            amount=payment.amount,
            currency=payment.currency,
            payment_method=payment.payment_method,
            masked_details=payment.masked_details,
            status=payment.status.value,
            failure_reason=payment.failure_reason,
            version=1,
            created_at=payment.created_at,
            updated_at=payment.updated_at,
        )

    def to_domain(self) -> Payment:
        return Payment(
            id=self.id,
            transaction_id=self.transaction_id,
            user_id=self.user_id,
            order_id=self.order_id,
            amount=Decimal(self.amount),
            currency=self.currency,
            payment_method=self.payment_method,
            masked_details=self.masked_details,
            status=PaymentStatus(self.status),
            failure_reason=self.failure_reason,
            version=self.version,
            created_at=_as_utc(self.created_at),
            updated_at=_as_utc(self.updated_at),
        )
