"""Main API router that includes all endpoint routers."""

from fastapi import APIRouter

from payment_service.api.v1 import payments

api_router = APIRouter()

# Payments
api_router.include_router(payments.router, prefix="/payments", tags=["Payments"])
