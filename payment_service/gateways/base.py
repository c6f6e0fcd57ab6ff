"""Base payment gateway interface.

All gateway adapters must implement this interface.
Business logic should NOT live in adapters - only the accept/reject verdict.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from payment_service.schemas.payment import PaymentRequest


class GatewayType(str, Enum):
    """Supported payment gateways."""

    SIMULATED = "simulated"


@dataclass(frozen=True)
class GatewayDecision:
    """Verdict for a single payment attempt."""

    accepted: bool
    reason: str | None = None

    @classmethod
    def accept(cls) -> "GatewayDecision":
        return cls(accepted=True)

    @classmethod
    def reject(cls, reason: str) -> "GatewayDecision":
        return cls(accepted=False, reason=reason)


class PaymentGateway(ABC):
    """Abstract base class for payment gateway decisions."""

    @property
    @abstractmethod
    def gateway_type(self) -> GatewayType:
        """Return the gateway type."""
        pass

    @abstractmethod
    async def decide(self, request: PaymentRequest) -> GatewayDecision:
        """Decide whether a validated payment request settles.

        A rejection is a normal outcome and must be returned, not raised.

        Args:
            request: Validated payment request, including raw instrument details

        Returns:
            GatewayDecision with the verdict and a rejection reason

        Raises:
            DecisionError: If the gateway cannot produce a verdict
        """
        pass
