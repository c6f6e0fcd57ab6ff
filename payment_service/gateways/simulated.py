"""Simulated payment gateway adapter."""

import logging
import random
from decimal import Decimal

from payment_service.config import settings
from payment_service.gateways.base import GatewayDecision, GatewayType, PaymentGateway
from payment_service.schemas.payment import PaymentRequest

logger = logging.getLogger(__name__)

HIGH_VALUE_REASON = "Amount exceeds high-value transaction limit"
DECLINED_CARD_REASON = "Card declined"
RANDOM_DECLINE_REASON = "Payment declined by issuer"


class SimulatedGateway(PaymentGateway):
    """Stand-in for a settlement network.

    Rules, first match wins:
    1. Reject amounts above the high-value limit
    2. Reject cards ending in the declined suffix
    3. Accept with `success_rate` probability
    """

    def __init__(
        self,
        high_value_limit: Decimal | None = None,
        declined_card_suffix: str | None = None,
        success_rate: float | None = None,
        rng: random.Random | None = None,
    ):
        self.high_value_limit = (
            high_value_limit if high_value_limit is not None else settings.high_value_limit
        )
        self.declined_card_suffix = (
            declined_card_suffix if declined_card_suffix is not None else settings.declined_card_suffix
        )
        self.success_rate = (
            success_rate if success_rate is not None else settings.gateway_success_rate
        )
        self._rng = rng or random.Random()

    @property
    def gateway_type(self) -> GatewayType:
        return GatewayType.SIMULATED

    async def decide(self, request: PaymentRequest) -> GatewayDecision:
        if request.amount is not None and request.amount > self.high_value_limit:
            return GatewayDecision.reject(HIGH_VALUE_REASON)

        card_number = request.details.card_number if request.details else None
        if card_number:
            card_number = "".join(card_number.split())
        if card_number and card_number.endswith(self.declined_card_suffix):
            return GatewayDecision.reject(DECLINED_CARD_REASON)

        if self._rng.random() < self.success_rate:
            return GatewayDecision.accept()

        logger.debug("Simulated gateway produced a random decline")
        return GatewayDecision.reject(RANDOM_DECLINE_REASON)
