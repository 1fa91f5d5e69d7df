"""
Repository for subscription management.
"""

from typing import Optional
from sqlalchemy import select, update

from common.repositories.base import BaseRepository
from common.core.telemetry import trace_span
from packages.billing.models.database.plan import PlanEntity
from packages.billing.models.database.subscription import SubscriptionEntity
from packages.billing.models.domain.subscription import Subscription


class SubscriptionRepository(BaseRepository[SubscriptionEntity, Subscription]):
    """Repository for team subscriptions."""

    def __init__(self):
        super().__init__(SubscriptionEntity, Subscription)

    @trace_span
    async def get_with_plan_price(
        self, subscription_id: int
    ) -> Optional[tuple[Subscription, int]]:
        """Subscription joined with the price of its current plan."""
        async with self._get_session() as session:
            result = await session.execute(
                select(SubscriptionEntity, PlanEntity.price)
                .join(PlanEntity, SubscriptionEntity.plan_id == PlanEntity.id)
                .where(SubscriptionEntity.id == subscription_id)
            )
            row = result.one_or_none()
            if row is None:
                return None
            db_subscription, price = row
            return self._entity_to_domain(db_subscription), price

    @trace_span
    async def change_plan(
        self, subscription_id: int, plan_id: int, expected_version: int
    ) -> bool:
        """
        Point the subscription at a new plan if it is still at expected_version.

        Returns False when another change landed first (zero rows matched).
        """
        async with self._get_session() as session:
            result = await session.execute(
                update(SubscriptionEntity)
                .where(
                    SubscriptionEntity.id == subscription_id,
                    SubscriptionEntity.version == expected_version,
                )
                .values(plan_id=plan_id, version=SubscriptionEntity.version + 1)
            )
            await session.flush()
            return result.rowcount == 1
