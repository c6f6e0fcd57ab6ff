"""Payment lifecycle service.

Owns validation, transaction identifiers, masking, the gateway decision and
the status transitions of a payment. Persistence goes through a
PaymentRecordStore, the verdict through a PaymentGateway.
"""

import logging
import uuid
from collections.abc import Callable
from dataclasses import replace
from decimal import Decimal

from payment_service.core.exceptions import (
    DecisionError,
    GuardViolationError,
    NotFoundError,
    StaleRecordError,
    StorageError,
    ValidationError,
)
from payment_service.domain.payment import (
    AMOUNT_PRECISION,
    AMOUNT_SCALE,
    CURRENCY_LENGTH,
    ORDER_ID_MAX_LENGTH,
    PAYMENT_METHOD_MAX_LENGTH,
    USER_ID_MAX_LENGTH,
    Payment,
    PaymentStatus,
)
from payment_service.domain.payment_state import assert_payment_transition
from payment_service.gateways.base import GatewayDecision, PaymentGateway
from payment_service.repositories.base import PaymentRecordStore
from payment_service.schemas.payment import PaymentRequest, PaymentResponse
from payment_service.utils.masking import mask_payment_details
from payment_service.utils.transaction_id import generate_transaction_id

logger = logging.getLogger(__name__)

DEFAULT_FAILURE_REASON = "Payment processing failed"
MAX_TRANSACTION_ID_ATTEMPTS = 5


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _decimal_places(value: Decimal) -> int:
    _, digits, exponent = value.as_tuple()
    # Trailing fractional zeros do not count
    while exponent < 0 and len(digits) > 1 and digits[-1] == 0:
        digits, exponent = digits[:-1], exponent + 1
    return max(-exponent, 0)


def validate_payment_request(request: PaymentRequest | None) -> None:
    """Check a payment request before anything is generated or stored.

    Raises:
        ValidationError: Naming the first offending field
    """
    if request is None:
        raise ValidationError("Invalid payment request")
    if _is_blank(request.user_id):
        raise ValidationError("User ID is required")
    if len(request.user_id.strip()) > USER_ID_MAX_LENGTH:
        raise ValidationError(f"User ID must be at most {USER_ID_MAX_LENGTH} characters")
    if request.amount is None:
        raise ValidationError("Amount is required")
    if not request.amount.is_finite() or request.amount <= 0:
        raise ValidationError("Amount must be positive")
    # Amounts must fit NUMERIC(19, 4) exactly
    if _decimal_places(request.amount) > AMOUNT_SCALE:
        raise ValidationError("Amount has too many decimal places")
    if request.amount.adjusted() >= AMOUNT_PRECISION - AMOUNT_SCALE:
        raise ValidationError("Amount is too large")
    if _is_blank(request.currency):
        raise ValidationError("Currency is required")
    if len(request.currency.strip()) != CURRENCY_LENGTH:
        raise ValidationError(f"Currency must be {CURRENCY_LENGTH} characters")
    if _is_blank(request.payment_method):
        raise ValidationError("Payment method is required")
    if len(request.payment_method.strip()) > PAYMENT_METHOD_MAX_LENGTH:
        raise ValidationError(
            f"Payment method must be at most {PAYMENT_METHOD_MAX_LENGTH} characters"
        )
    if request.order_id is not None and len(request.order_id) > ORDER_ID_MAX_LENGTH:
        raise ValidationError(f"Order ID must be at most {ORDER_ID_MAX_LENGTH} characters")


def parse_payment_id(payment_id: uuid.UUID | str) -> uuid.UUID:
    """Coerce an incoming payment id.

    Raises:
        ValidationError: If the id is not a valid UUID
    """
    if isinstance(payment_id, uuid.UUID):
        return payment_id
    try:
        return uuid.UUID(str(payment_id).strip())
    except ValueError:
        raise ValidationError("Invalid payment ID format") from None


class PaymentService:
    """Service for processing, querying and refunding payments."""

    def __init__(
        self,
        store: PaymentRecordStore,
        gateway: PaymentGateway,
        transaction_id_factory: Callable[[], str] = generate_transaction_id,
    ):
        self.store = store
        self.gateway = gateway
        self._transaction_id_factory = transaction_id_factory

    async def process(self, request: PaymentRequest) -> PaymentResponse:
        """Decide and record a new payment.

        Exactly one record is saved per valid request, whether the gateway
        accepts or rejects it. A rejection is returned with success=False.

        Args:
            request: Incoming payment request

        Returns:
            PaymentResponse describing the persisted payment

        Raises:
            ValidationError: If the request is incomplete (nothing is saved)
            DecisionError: If the gateway fails to produce a verdict
            StorageError: If the payment cannot be persisted
        """
        validate_payment_request(request)

        payment = Payment(
            transaction_id=await self._new_transaction_id(),
            user_id=request.user_id.strip(),
            amount=request.amount,
            currency=request.currency.strip(),
            payment_method=request.payment_method.strip(),
            order_id=request.order_id,
            masked_details=mask_payment_details(request.details),
        )

        decision = await self._decide(request)
        if decision.accepted:
            target, reason = PaymentStatus.SUCCESS, None
        else:
            target, reason = PaymentStatus.FAILED, decision.reason or DEFAULT_FAILURE_REASON
        assert_payment_transition(payment.status, target)

        saved = await self.store.save(replace(payment, status=target, failure_reason=reason))
        logger.info(
            f"Payment {saved.transaction_id} for user {saved.user_id} "
            f"recorded as {saved.status.value}"
        )

        if decision.accepted:
            return PaymentResponse.from_payment(True, "Payment processed successfully", saved)
        return PaymentResponse.from_payment(False, f"{DEFAULT_FAILURE_REASON}: {reason}", saved)

    async def validate(self, payment_id: uuid.UUID | str) -> PaymentResponse:
        """Report whether a payment settled. Read-only."""
        payment = await self._get(payment_id)
        is_valid = payment.status == PaymentStatus.SUCCESS
        message = "Payment is valid" if is_valid else "Payment is not valid"
        return PaymentResponse.from_payment(is_valid, message, payment)

    async def get_status(self, payment_id: uuid.UUID | str) -> PaymentResponse:
        """Fetch a payment's current record."""
        payment = await self._get(payment_id)
        return PaymentResponse.from_payment(True, "Payment found", payment)

    async def get_by_transaction_id(self, transaction_id: str) -> PaymentResponse:
        """Fetch a payment by its external transaction reference."""
        payment = await self.store.find_by_transaction_id(transaction_id.strip())
        if payment is None:
            raise NotFoundError("Transaction", transaction_id)
        return PaymentResponse.from_payment(True, "Payment found", payment)

    async def history(self, user_id: str) -> list[Payment]:
        """List a user's payments, newest first. Unknown users get an empty list."""
        return await self.store.find_by_user_id(user_id.strip())

    async def order_payments(self, order_id: str) -> list[Payment]:
        """List every attempt made against an order, newest first."""
        return await self.store.find_by_order_id(order_id)

    async def refund(self, payment_id: uuid.UUID | str) -> PaymentResponse:
        """Reverse a successful payment.

        Raises:
            NotFoundError: If the payment does not exist
            GuardViolationError: If the payment is not in SUCCESS, including
                when a concurrent refund got there first
        """
        payment = await self._get(payment_id)
        assert_payment_transition(payment.status, PaymentStatus.REFUNDED)

        try:
            refunded = await self.store.save(payment.with_status(PaymentStatus.REFUNDED))
        except StaleRecordError as e:
            current = await self.store.find_by_id(payment.id)
            current_status = current.status.value if current else "unknown"
            logger.warning(
                f"Refund of payment {payment.id} lost a concurrent update "
                f"(current status: {current_status})"
            )
            raise GuardViolationError(
                f"Only successful payments can be refunded (current status: {current_status})"
            ) from e

        logger.info(f"Payment {refunded.transaction_id} refunded")
        return PaymentResponse.from_payment(True, "Payment refunded successfully", refunded)

    async def _get(self, payment_id: uuid.UUID | str) -> Payment:
        payment = await self.store.find_by_id(parse_payment_id(payment_id))
        if payment is None:
            raise NotFoundError("Payment", str(payment_id))
        return payment

    async def _decide(self, request: PaymentRequest) -> GatewayDecision:
        try:
            return await self.gateway.decide(request)
        except DecisionError:
            raise
        except Exception as e:
            logger.error(f"Gateway {self.gateway.gateway_type.value} failed: {e}")
            raise DecisionError(self.gateway.gateway_type.value, str(e)) from e

    async def _new_transaction_id(self) -> str:
        for _ in range(MAX_TRANSACTION_ID_ATTEMPTS):
            transaction_id = self._transaction_id_factory()
            if not await self.store.exists_by_transaction_id(transaction_id):
                return transaction_id
            logger.warning(f"Transaction ID collision on {transaction_id}, drawing again")
        raise StorageError("Could not allocate a unique transaction ID")
