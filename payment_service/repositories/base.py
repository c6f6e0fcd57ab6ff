"""Payment record store interface."""

import uuid
from abc import ABC, abstractmethod

from payment_service.domain.payment import Payment


class PaymentRecordStore(ABC):
    """Port for payment persistence.

    Contract:
    - find_* methods return None / an empty list when nothing matches
    - save() inserts when the payment has no id, otherwise updates it
    - updates are optimistic: they apply only if the stored version still
      equals payment.version, otherwise StaleRecordError is raised
    - a successful save is visible to every later read on the same store
    """

    @abstractmethod
    async def save(self, payment: Payment) -> Payment:
        """Persist a payment.

        Args:
            payment: Payment to insert or update

        Returns:
            The stored payment, carrying its assigned id and current version

        Raises:
            StaleRecordError: If the record changed since it was read
            StorageError: On constraint violation or unavailable storage
        """

    @abstractmethod
    async def find_by_id(self, payment_id: uuid.UUID) -> Payment | None:
        """Retrieve a payment by its internal id."""

    @abstractmethod
    async def find_by_transaction_id(self, transaction_id: str) -> Payment | None:
        """Retrieve a payment by its external transaction reference."""

    @abstractmethod
    async def find_by_user_id(self, user_id: str) -> list[Payment]:
        """List a user's payments, most recently created first."""

    @abstractmethod
    async def find_by_order_id(self, order_id: str) -> list[Payment]:
        """List every attempt made against an external order, most recent first."""

    @abstractmethod
    async def exists_by_transaction_id(self, transaction_id: str) -> bool:
        """Check whether a transaction reference is already taken."""
