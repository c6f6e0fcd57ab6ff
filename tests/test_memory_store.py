"""Tests for the in-memory payment store."""
import uuid
from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest

from payment_service.core.exceptions import StaleRecordError, StorageError
from payment_service.domain.payment import Payment, PaymentStatus
from payment_service.repositories.memory import InMemoryPaymentStore


def _payment(
    transaction_id: str,
    user_id: str = "u1",
    created_at: datetime | None = None,
    order_id: str | None = None,
) -> Payment:
    return Payment(
        transaction_id=transaction_id,
        user_id=user_id,
        order_id=order_id,
        amount=Decimal("12.50"),
        currency="EUR",
        payment_method="WALLET",
        status=PaymentStatus.SUCCESS,
        created_at=created_at or datetime.now(UTC),
    )


@pytest.mark.asyncio
async def test_insert_assigns_id_and_version(memory_store: InMemoryPaymentStore) -> None:
    saved = await memory_store.save(_payment("TXN_A"))

    assert saved.id is not None
    assert saved.version == 1
    assert await memory_store.find_by_id(saved.id) == saved
    assert await memory_store.find_by_transaction_id("TXN_A") == saved
    assert await memory_store.exists_by_transaction_id("TXN_A")
    assert not await memory_store.exists_by_transaction_id("TXN_B")


@pytest.mark.asyncio
async def test_duplicate_transaction_id_rejected(memory_store: InMemoryPaymentStore) -> None:
    await memory_store.save(_payment("TXN_DUP"))

    with pytest.raises(StorageError):
        await memory_store.save(_payment("TXN_DUP"))


@pytest.mark.asyncio
async def test_update_bumps_version_and_keeps_identity(memory_store: InMemoryPaymentStore) -> None:
    saved = await memory_store.save(_payment("TXN_A"))

    updated = await memory_store.save(saved.with_status(PaymentStatus.REFUNDED))

    assert updated.status == PaymentStatus.REFUNDED
    assert updated.version == 2
    assert updated.id == saved.id
    assert updated.transaction_id == saved.transaction_id
    assert updated.created_at == saved.created_at
    assert (await memory_store.find_by_id(saved.id)).status == PaymentStatus.REFUNDED


@pytest.mark.asyncio
async def test_stale_update_rejected(memory_store: InMemoryPaymentStore) -> None:
    saved = await memory_store.save(_payment("TXN_A"))
    await memory_store.save(saved.with_status(PaymentStatus.REFUNDED))

    with pytest.raises(StaleRecordError):
        await memory_store.save(saved.with_status(PaymentStatus.REFUNDED))

    assert (await memory_store.find_by_id(saved.id)).version == 2


@pytest.mark.asyncio
async def test_missing_lookups(memory_store: InMemoryPaymentStore) -> None:
    assert await memory_store.find_by_id(uuid.uuid4()) is None
    assert await memory_store.find_by_transaction_id("TXN_NONE") is None
    assert await memory_store.find_by_user_id("nobody") == []


@pytest.mark.asyncio
async def test_history_newest_first(memory_store: InMemoryPaymentStore) -> None:
    base = datetime(2026, 1, 1, tzinfo=UTC)
    await memory_store.save(_payment("TXN_OLD", created_at=base))
    await memory_store.save(_payment("TXN_NEW", created_at=base + timedelta(hours=2)))
    await memory_store.save(_payment("TXN_MID", created_at=base + timedelta(hours=1)))
    await memory_store.save(_payment("TXN_OTHER", user_id="u2", created_at=base))

    history = await memory_store.find_by_user_id("u1")

    assert [p.transaction_id for p in history] == ["TXN_NEW", "TXN_MID", "TXN_OLD"]


@pytest.mark.asyncio
async def test_history_ties_list_latest_insert_first(memory_store: InMemoryPaymentStore) -> None:
    same_time = datetime(2026, 1, 1, tzinfo=UTC)
    await memory_store.save(_payment("TXN_1", created_at=same_time))
    await memory_store.save(_payment("TXN_2", created_at=same_time))

    history = await memory_store.find_by_user_id("u1")

    assert [p.transaction_id for p in history] == ["TXN_2", "TXN_1"]


@pytest.mark.asyncio
async def test_find_by_order_id(memory_store: InMemoryPaymentStore) -> None:
    same_time = datetime(2026, 1, 1, tzinfo=UTC)
    await memory_store.save(_payment("TXN_1", order_id="order-1", created_at=same_time))
    await memory_store.save(_payment("TXN_2", order_id="order-1", created_at=same_time))
    await memory_store.save(_payment("TXN_3", order_id="order-2"))

    attempts = await memory_store.find_by_order_id("order-1")

    assert [p.transaction_id for p in attempts] == ["TXN_2", "TXN_1"]
    assert await memory_store.find_by_order_id("order-3") == []
