"""In-memory payment store.

Suitable for tests and single-process deployments. Data is lost on restart.
"""

import asyncio
import itertools
import uuid
from dataclasses import replace

from payment_service.core.exceptions import StaleRecordError, StorageError
from payment_service.domain.payment import Payment
from payment_service.repositories.base import PaymentRecordStore


class InMemoryPaymentStore(PaymentRecordStore):
    """Dict-backed store guarded by a single asyncio lock."""

    def __init__(self):
        self._payments: dict[uuid.UUID, Payment] = {}
        self._by_transaction_id: dict[str, uuid.UUID] = {}
        # Insertion order breaks created_at ties in history listings
        self._sequence: dict[uuid.UUID, int] = {}
        self._counter = itertools.count()
        self._lock = asyncio.Lock()

    async def save(self, payment: Payment) -> Payment:
        async with self._lock:
            if payment.id is None:
                return self._insert(payment)
            return self._update(payment)

    def _insert(self, payment: Payment) -> Payment:
        if payment.transaction_id in self._by_transaction_id:
            raise StorageError(f"Duplicate transaction ID {payment.transaction_id}")

        stored = replace(payment, id=uuid.uuid4(), version=1)
        self._payments[stored.id] = stored
        self._by_transaction_id[stored.transaction_id] = stored.id
        self._sequence[stored.id] = next(self._counter)
        return stored

    def _update(self, payment: Payment) -> Payment:
        current = self._payments.get(payment.id)
        if current is None or current.version != payment.version:
            raise StaleRecordError(str(payment.id), payment.version)

        # Identity fields are fixed at creation
        stored = replace(
            current,
            status=payment.status,
            failure_reason=payment.failure_reason,
            masked_details=payment.masked_details,
            updated_at=payment.updated_at,
            version=current.version + 1,
        )
        self._payments[stored.id] = stored
        return stored

    async def find_by_id(self, payment_id: uuid.UUID) -> Payment | None:
        async with self._lock:
            return self._payments.get(payment_id)

    async def find_by_transaction_id(self, transaction_id: str) -> Payment | None:
        async with self._lock:
            payment_id = self._by_transaction_id.get(transaction_id)
            return self._payments.get(payment_id) if payment_id else None

    async def find_by_user_id(self, user_id: str) -> list[Payment]:
        async with self._lock:
            return self._newest_first(p for p in self._payments.values() if p.user_id == user_id)

    async def find_by_order_id(self, order_id: str) -> list[Payment]:
        async with self._lock:
            return self._newest_first(p for p in self._payments.values() if p.order_id == order_id)

    def _newest_first(self, payments) -> list[Payment]:
        return sorted(
            payments,
            key=lambda p: (p.created_at, self._sequence[p.id]),
            reverse=True,
        )

    async def exists_by_transaction_id(self, transaction_id: str) -> bool:
        async with self._lock:
            return transaction_id in self._by_transaction_id
