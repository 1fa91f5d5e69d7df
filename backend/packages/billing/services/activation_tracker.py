"""
Activation tracking: the authoritative start of a subscription's billing cycle.
"""

from datetime import datetime, timezone
from typing import Callable, Optional

from common.core.exceptions import NotFoundError
from common.core.telemetry import trace_span, get_logger
from packages.billing.models.domain.enums import BillingCycle
from packages.billing.models.domain.subscription import (
    SubscriptionActivation,
    SubscriptionActivationCreateModel,
)
from packages.billing.repositories.activation_repository import ActivationRepository

logger = get_logger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ActivationTracker:
    """
    Records one activation per confirmed payment.

    activate() is not idempotent; readers disambiguate by taking
    the activation with the latest activated_at.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self.activation_repo = ActivationRepository()
        self.clock = clock

    @trace_span
    async def activate(
        self,
        subscription_id: int,
        plan_id: int,
        billing_cycle: BillingCycle,
        at: Optional[datetime] = None,
    ) -> SubscriptionActivation:
        activation = await self.activation_repo.create(
            SubscriptionActivationCreateModel(
                subscription_id=subscription_id,
                plan_id=plan_id,
                activated_at=at or self.clock(),
                billing_cycle=billing_cycle,
            )
        )
        logger.info(
            f"Activated subscription {subscription_id} on plan {plan_id} ({billing_cycle.value})",
            extra={
                "subscription_id": subscription_id,
                "activation_id": activation.id,
                "billing_cycle": billing_cycle.value,
            },
        )
        return activation

    @trace_span
    async def find_latest_activation(
        self, subscription_id: int
    ) -> Optional[SubscriptionActivation]:
        return await self.activation_repo.get_latest(subscription_id)

    @trace_span
    async def latest_activation(self, subscription_id: int) -> SubscriptionActivation:
        activation = await self.activation_repo.get_latest(subscription_id)
        if activation is None:
            raise NotFoundError(
                f"Subscription {subscription_id} has never been activated"
            )
        return activation
