"""Payment value object."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

# Column limits shared by validation and the payments table
USER_ID_MAX_LENGTH = 100
ORDER_ID_MAX_LENGTH = 100
PAYMENT_METHOD_MAX_LENGTH = 50
CURRENCY_LENGTH = 3
AMOUNT_PRECISION = 19
AMOUNT_SCALE = 4


class PaymentStatus(str, Enum):
    """Payment lifecycle states."""

    PENDING = "PENDING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


@dataclass(frozen=True)
class Payment:
    """A single payment attempt.

    Instances are immutable. The only allowed change after the initial
    decision is produced with `with_status`, which returns a new value.
    `id` and `version` are owned by the store and stay unset until the
    first save.
    """

    transaction_id: str
    user_id: str
    amount: Decimal
    currency: str
    payment_method: str
    order_id: str | None = None
    status: PaymentStatus = PaymentStatus.PENDING
    failure_reason: str | None = None
    masked_details: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime | None = None
    id: uuid.UUID | None = None
    version: int = 0

    def with_status(self, status: PaymentStatus, failure_reason: str | None = None) -> Payment:
        """Return a copy carrying the new status."""
        return replace(
            self,
            status=status,
            failure_reason=failure_reason,
            updated_at=datetime.now(UTC),
        )
