"""Payment endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from payment_service.api.deps import get_payment_service
from payment_service.schemas.payment import (
    PaymentHistoryResponse,
    PaymentRecordResponse,
    PaymentRequest,
    PaymentResponse,
)
from payment_service.services.payment_service import PaymentService

router = APIRouter()

PaymentServiceDep = Annotated[PaymentService, Depends(get_payment_service)]


def _respond(result: PaymentResponse, failure_status: int) -> PaymentResponse | JSONResponse:
    """Return the result as-is on success, otherwise with the failure status."""
    if result.success:
        return result
    return JSONResponse(
        status_code=failure_status,
        content=result.model_dump(mode="json", by_alias=True),
    )


@router.post("/process", response_model=PaymentResponse)
async def process_payment(
    payment_data: PaymentRequest,
    service: PaymentServiceDep,
) -> PaymentResponse | JSONResponse:
    """Process a new payment. Declined payments answer 402 with the stored record."""
    result = await service.process(payment_data)
    return _respond(result, status.HTTP_402_PAYMENT_REQUIRED)


@router.get("/history/{user_id}", response_model=PaymentHistoryResponse)
async def get_payment_history(
    user_id: str,
    service: PaymentServiceDep,
) -> PaymentHistoryResponse:
    """List a user's payments, newest first."""
    payments = await service.history(user_id)
    return PaymentHistoryResponse(
        data=[PaymentRecordResponse.from_payment(p) for p in payments],
    )


@router.get("/order/{order_id}", response_model=PaymentHistoryResponse)
async def get_order_payments(
    order_id: str,
    service: PaymentServiceDep,
) -> PaymentHistoryResponse:
    """List the payment attempts made against an order."""
    payments = await service.order_payments(order_id)
    return PaymentHistoryResponse(
        message="Order payments retrieved successfully",
        data=[PaymentRecordResponse.from_payment(p) for p in payments],
    )


@router.get("/transaction/{transaction_id}", response_model=PaymentResponse)
async def get_payment_by_transaction(
    transaction_id: str,
    service: PaymentServiceDep,
) -> PaymentResponse:
    """Look up a payment by its transaction reference."""
    return await service.get_by_transaction_id(transaction_id)


@router.get("/{payment_id}/validate", response_model=PaymentResponse)
async def validate_payment(
    payment_id: str,
    service: PaymentServiceDep,
) -> PaymentResponse:
    """Check whether a payment settled successfully.

    A payment that exists but did not settle is a normal answer with
    success=false, not an error.
    """
    return await service.validate(payment_id)


@router.get("/{payment_id}", response_model=PaymentResponse)
async def get_payment_status(
    payment_id: str,
    service: PaymentServiceDep,
) -> PaymentResponse:
    """Fetch a payment's current record."""
    return await service.get_status(payment_id)


@router.post("/{payment_id}/refund", response_model=PaymentResponse)
async def refund_payment(
    payment_id: str,
    service: PaymentServiceDep,
) -> PaymentResponse:
    """Refund a successful payment."""
    return await service.refund(payment_id)
