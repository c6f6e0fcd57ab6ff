"""Payment record stores."""

from payment_service.repositories.base import PaymentRecordStore
from payment_service.repositories.memory import InMemoryPaymentStore
from payment_service.repositories.sql import SqlPaymentStore

__all__ = [
    "PaymentRecordStore",
    "InMemoryPaymentStore",
    "SqlPaymentStore",
]
