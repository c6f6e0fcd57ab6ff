"""Payment gateway adapters."""

from payment_service.gateways.base import GatewayDecision, GatewayType, PaymentGateway
from payment_service.gateways.simulated import SimulatedGateway

__all__ = [
    "GatewayDecision",
    "GatewayType",
    "PaymentGateway",
    "SimulatedGateway",
]
