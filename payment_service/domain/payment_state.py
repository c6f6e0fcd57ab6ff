"""Payment state machine.

States:
- PENDING: in-memory default, never persisted
- SUCCESS: gateway accepted the payment
- FAILED: gateway rejected the payment
- REFUNDED: a successful payment was reversed
"""

from payment_service.core.exceptions import GuardViolationError
from payment_service.domain.payment import PaymentStatus

PAYMENT_TRANSITIONS: dict[PaymentStatus, set[PaymentStatus]] = {
    PaymentStatus.PENDING: {PaymentStatus.SUCCESS, PaymentStatus.FAILED},
    PaymentStatus.SUCCESS: {PaymentStatus.REFUNDED},
    PaymentStatus.FAILED: set(),
    PaymentStatus.REFUNDED: set(),
}


def can_transition(current: PaymentStatus, target: PaymentStatus) -> bool:
    return target in PAYMENT_TRANSITIONS.get(current, set())


def assert_payment_transition(current: PaymentStatus, target: PaymentStatus) -> None:
    """Validate payment state transition.

    Args:
        current: Current payment status
        target: Target payment status

    Raises:
        GuardViolationError: If transition is not allowed
    """
    if not can_transition(current, target):
        if target == PaymentStatus.REFUNDED:
            raise GuardViolationError(
                f"Only successful payments can be refunded (current status: {current.value})"
            )
        raise GuardViolationError(
            f"Invalid payment transition: {current.value} → {target.value}"
        )
