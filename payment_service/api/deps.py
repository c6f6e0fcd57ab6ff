"""API dependencies for wiring the payment service."""

from functools import lru_cache

from payment_service.config import settings
from payment_service.database import get_session_factory
from payment_service.gateways.base import PaymentGateway
from payment_service.gateways.simulated import SimulatedGateway
from payment_service.repositories.base import PaymentRecordStore
from payment_service.repositories.memory import InMemoryPaymentStore
from payment_service.repositories.sql import SqlPaymentStore
from payment_service.services.payment_service import PaymentService


@lru_cache
def get_payment_store() -> PaymentRecordStore:
    """Get the configured payment store."""
    if settings.store_backend == "memory":
        return InMemoryPaymentStore()
    return SqlPaymentStore(get_session_factory())


@lru_cache
def get_payment_gateway() -> PaymentGateway:
    """Get the gateway deciding payment outcomes."""
    return SimulatedGateway()


@lru_cache
def get_payment_service() -> PaymentService:
    """Get cached payment service instance."""
    return PaymentService(store=get_payment_store(), gateway=get_payment_gateway())
