"""HTTP-level tests for the payment endpoints."""
import uuid
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from payment_service.api.deps import get_payment_service
from payment_service.main import app
from payment_service.repositories.memory import InMemoryPaymentStore
from payment_service.services.payment_service import PaymentService

from conftest import FixedGateway

PAYMENT_BODY = {
    "userId": "u1",
    "amount": "50.00",
    "currency": "USD",
    "paymentMethod": "CARD",
    "orderId": "order-1001",
    "details": {
        "cardNumber": "4111111111111111",
        "cardHolder": "Jane Doe",
        "cvv": "987",
    },
}


@pytest.fixture
def gateway() -> FixedGateway:
    return FixedGateway(accepted=True)


@pytest_asyncio.fixture
async def client(gateway: FixedGateway) -> AsyncGenerator[AsyncClient, None]:
    """Client against the app with an in-memory store."""
    service = PaymentService(store=InMemoryPaymentStore(), gateway=gateway)
    app.dependency_overrides[get_payment_service] = lambda: service

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_health(client: AsyncClient) -> None:
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "UP"
    assert response.headers["X-Content-Type-Options"] == "nosniff"


@pytest.mark.asyncio
async def test_process_accepted(client: AsyncClient) -> None:
    response = await client.post("/api/payments/process", json=PAYMENT_BODY)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["status"] == "SUCCESS"
    assert body["transactionId"].startswith("TXN_")
    assert body["userId"] == "u1"
    assert body["orderId"] == "order-1001"
    assert "4111111111111111" not in response.text
    assert "X-Request-ID" in response.headers


@pytest.mark.asyncio
async def test_process_declined_is_402_with_record(client: AsyncClient, gateway: FixedGateway) -> None:
    gateway.accepted = False

    response = await client.post("/api/payments/process", json=PAYMENT_BODY)

    assert response.status_code == 402
    body = response.json()
    assert body["success"] is False
    assert body["status"] == "FAILED"
    assert body["paymentId"] is not None
    assert body["message"].startswith("Payment processing failed")


@pytest.mark.asyncio
async def test_process_invalid_request(client: AsyncClient) -> None:
    response = await client.post(
        "/api/payments/process", json={**PAYMENT_BODY, "currency": "US"}
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Currency must be 3 characters"}


@pytest.mark.asyncio
async def test_process_malformed_amount(client: AsyncClient) -> None:
    response = await client.post(
        "/api/payments/process", json={**PAYMENT_BODY, "amount": "lots"}
    )

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"].startswith("Invalid payment request")


@pytest.mark.asyncio
async def test_status_and_validate(client: AsyncClient) -> None:
    created = (await client.post("/api/payments/process", json=PAYMENT_BODY)).json()

    status_response = await client.get(f"/api/payments/{created['paymentId']}")
    validate_response = await client.get(f"/api/payments/{created['paymentId']}/validate")

    assert status_response.status_code == 200
    assert status_response.json()["transactionId"] == created["transactionId"]
    assert validate_response.json()["message"] == "Payment is valid"


@pytest.mark.asyncio
async def test_validate_failed_payment_is_not_an_error(
    client: AsyncClient, gateway: FixedGateway
) -> None:
    gateway.accepted = False
    created = (await client.post("/api/payments/process", json=PAYMENT_BODY)).json()

    response = await client.get(f"/api/payments/{created['paymentId']}/validate")

    assert response.status_code == 200
    assert response.json()["success"] is False
    assert response.json()["message"] == "Payment is not valid"


@pytest.mark.asyncio
async def test_unknown_payment_is_404(client: AsyncClient) -> None:
    response = await client.get(f"/api/payments/{uuid.uuid4()}")

    assert response.status_code == 404
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_malformed_payment_id_is_400(client: AsyncClient) -> None:
    response = await client.get("/api/payments/not-a-uuid")

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid payment ID format"


@pytest.mark.asyncio
async def test_refund_then_refund_again(client: AsyncClient) -> None:
    created = (await client.post("/api/payments/process", json=PAYMENT_BODY)).json()

    first = await client.post(f"/api/payments/{created['paymentId']}/refund")
    second = await client.post(f"/api/payments/{created['paymentId']}/refund")

    assert first.status_code == 200
    assert first.json()["status"] == "REFUNDED"
    assert second.status_code == 409
    assert second.json()["success"] is False
    assert (await client.get(f"/api/payments/{created['paymentId']}")).json()["status"] == "REFUNDED"


@pytest.mark.asyncio
async def test_history(client: AsyncClient) -> None:
    first = (await client.post("/api/payments/process", json=PAYMENT_BODY)).json()
    second = (await client.post("/api/payments/process", json=PAYMENT_BODY)).json()

    response = await client.get("/api/payments/history/u1")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert [p["transactionId"] for p in body["data"]] == [
        second["transactionId"],
        first["transactionId"],
    ]
    assert body["data"][0]["maskedDetails"] == "Card: ****1111, Holder: Jane Doe"

    empty = await client.get("/api/payments/history/nobody")
    assert empty.json()["data"] == []


@pytest.mark.asyncio
async def test_lookup_by_transaction_id(client: AsyncClient) -> None:
    created = (await client.post("/api/payments/process", json=PAYMENT_BODY)).json()

    found = await client.get(f"/api/payments/transaction/{created['transactionId']}")
    missing = await client.get("/api/payments/transaction/TXN_NOPE")

    assert found.json()["paymentId"] == created["paymentId"]
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_order_payments(client: AsyncClient) -> None:
    created = (await client.post("/api/payments/process", json=PAYMENT_BODY)).json()

    response = await client.get("/api/payments/order/order-1001")

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Order payments retrieved successfully"
    assert [p["transactionId"] for p in body["data"]] == [created["transactionId"]]


@pytest.mark.asyncio
async def test_process_amount_with_too_many_decimals(client: AsyncClient) -> None:
    response = await client.post(
        "/api/payments/process", json={**PAYMENT_BODY, "amount": "0.00001"}
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Amount has too many decimal places"}
