"""
Pytest configuration and fixtures.
"""
from decimal import Decimal
from typing import Any, AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from payment_service.database import create_engine, init_db
from payment_service.gateways.base import GatewayDecision, GatewayType, PaymentGateway
from payment_service.repositories.memory import InMemoryPaymentStore
from payment_service.repositories.sql import SqlPaymentStore
from payment_service.schemas.payment import PaymentDetails, PaymentRequest
from payment_service.services.payment_service import PaymentService


class FixedGateway(PaymentGateway):
    """Gateway returning the same verdict for every request."""

    def __init__(self, accepted: bool = True, reason: str = "Declined by test gateway"):
        self.accepted = accepted
        self.reason = reason
        self.requests: list[PaymentRequest] = []

    @property
    def gateway_type(self) -> GatewayType:
        return GatewayType.SIMULATED

    async def decide(self, request: PaymentRequest) -> GatewayDecision:
        self.requests.append(request)
        if self.accepted:
            return GatewayDecision.accept()
        return GatewayDecision.reject(self.reason)


@pytest.fixture
def memory_store() -> InMemoryPaymentStore:
    """Empty in-memory payment store."""
    return InMemoryPaymentStore()


@pytest.fixture
def accepting_gateway() -> FixedGateway:
    return FixedGateway(accepted=True)


@pytest.fixture
def rejecting_gateway() -> FixedGateway:
    return FixedGateway(accepted=False)


@pytest.fixture
def payment_service(
    memory_store: InMemoryPaymentStore, accepting_gateway: FixedGateway
) -> PaymentService:
    """Service that accepts every valid payment."""
    return PaymentService(store=memory_store, gateway=accepting_gateway)


@pytest.fixture
def declining_service(
    memory_store: InMemoryPaymentStore, rejecting_gateway: FixedGateway
) -> PaymentService:
    """Service that declines every valid payment."""
    return PaymentService(store=memory_store, gateway=rejecting_gateway)


@pytest.fixture
def card_details() -> PaymentDetails:
    return PaymentDetails(
        card_number="4111111111111111",
        card_holder="Jane Doe",
        expiry_month="12",
        expiry_year="2030",
        cvv="987",
        billing_address="1 Main Street, Springfield",
    )


@pytest.fixture
def sample_request(card_details: PaymentDetails) -> PaymentRequest:
    """Sample card payment request."""
    return PaymentRequest(
        user_id="u1",
        amount=Decimal("50.00"),
        currency="USD",
        payment_method="CARD",
        order_id="order-1001",
        details=card_details,
    )


@pytest_asyncio.fixture
async def sql_session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker[AsyncSession], Any]:
    """Session factory bound to a fresh SQLite database file."""
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'payments.db'}")
    await init_db(engine)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def sql_store(sql_session_factory: async_sessionmaker[AsyncSession]) -> SqlPaymentStore:
    return SqlPaymentStore(sql_session_factory)
