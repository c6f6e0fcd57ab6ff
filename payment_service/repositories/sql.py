"""SQLAlchemy-backed payment store."""

import logging
import uuid
from dataclasses import replace

from sqlalchemy import exists, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from payment_service.core.exceptions import StaleRecordError, StorageError
from payment_service.domain.payment import Payment
from payment_service.models.payment import PaymentRecord
from payment_service.repositories.base import PaymentRecordStore

logger = logging.getLogger(__name__)


class SqlPaymentStore(PaymentRecordStore):
    """Payment store running one short transaction per call."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def save(self, payment: Payment) -> Payment:
        try:
            if payment.id is None:
                return await self._insert(payment)
            return await self._update(payment)
        except (StaleRecordError, StorageError):
            raise
        except IntegrityError as e:
            logger.error(f"Constraint violation saving payment {payment.transaction_id}: {e}")
            raise StorageError(
                f"Payment {payment.transaction_id} violates a storage constraint"
            ) from e
        except SQLAlchemyError as e:
            logger.error(f"Failed to save payment {payment.transaction_id}: {e}")
            raise StorageError() from e

    async def _insert(self, payment: Payment) -> Payment:
        record = PaymentRecord.from_domain(payment)
        stored = replace(payment, id=record.id, version=record.version)
        async with self._session_factory() as session:
            async with session.begin():
                session.add(record)
        return stored

    async def _update(self, payment: Payment) -> Payment:
        # Only the status columns change after creation
        stmt = (
            update(PaymentRecord)
            .where(
                PaymentRecord.id == payment.id,
                PaymentRecord.version == payment.version,
            )
            .values(
                status=payment.status.value,
                failure_reason=payment.failure_reason,
                masked_details=payment.masked_details,
                updated_at=payment.updated_at,
                version=payment.version + 1,
            )
        )
        async with self._session_factory() as session:
            async with session.begin():
                result = await session.execute(stmt)
                updated = result.rowcount
        if updated != 1:
            raise StaleRecordError(str(payment.id), payment.version)
        return replace(payment, version=payment.version + 1)

    async def find_by_id(self, payment_id: uuid.UUID) -> Payment | None:
        return await self._fetch_one(select(PaymentRecord).where(PaymentRecord.id == payment_id))

    async def find_by_transaction_id(self, transaction_id: str) -> Payment | None:
        return await self._fetch_one(
            select(PaymentRecord).where(PaymentRecord.transaction_id == transaction_id)
        )

    async def find_by_user_id(self, user_id: str) -> list[Payment]:
        return await self._fetch_all(PaymentRecord.user_id == user_id)

    async def find_by_order_id(self, order_id: str) -> list[Payment]:
        return await self._fetch_all(PaymentRecord.order_id == order_id)

    async def exists_by_transaction_id(self, transaction_id: str) -> bool:
        stmt = select(exists().where(PaymentRecord.transaction_id == transaction_id))
        try:
            async with self._session_factory() as session:
                return bool(await session.scalar(stmt))
        except SQLAlchemyError as e:
            logger.error(f"Failed to check transaction ID {transaction_id}: {e}")
            raise StorageError() from e

    async def _fetch_all(self, criterion) -> list[Payment]:
        stmt = (
            select(PaymentRecord)
            .where(criterion)
            .order_by(PaymentRecord.created_at.desc())
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return [record.to_domain() for record in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Failed to load payments: {e}")
            raise StorageError() from e

    async def _fetch_one(self, stmt) -> Payment | None:
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                record = result.scalar_one_or_none()
                return record.to_domain() if record else None
        except SQLAlchemyError as e:
            logger.error(f"Failed to load payment: {e}")
            raise StorageError() from e
