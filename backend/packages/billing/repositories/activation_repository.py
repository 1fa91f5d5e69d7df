"""
Repository for subscription activations.
"""

from typing import Optional
from sqlalchemy import select

from common.repositories.base import BaseRepository
from common.core.telemetry import trace_span
from packages.billing.models.database.subscription_activation import (
    SubscriptionActivationEntity,
)
from packages.billing.models.domain.subscription import (
    SubscriptionActivation,
    SubscriptionActivationCreateModel,
)


class ActivationRepository(
    BaseRepository[SubscriptionActivationEntity, SubscriptionActivation]
):
    """Repository for billing period activations."""

    def __init__(self):
        super().__init__(SubscriptionActivationEntity, SubscriptionActivation)

    @trace_span
    async def create(
        self, create_model: SubscriptionActivationCreateModel
    ) -> SubscriptionActivation:
        db_activation = SubscriptionActivationEntity(
            subscription_id=create_model.subscription_id,
            plan_id=create_model.plan_id,
            activated_at=create_model.activated_at,
            billing_cycle=create_model.billing_cycle.value,
        )
        async with self._get_session() as session:
            session.add(db_activation)
            await session.flush()
            await session.refresh(db_activation)
            return self._entity_to_domain(db_activation)

    @trace_span
    async def get_latest(self, subscription_id: int) -> Optional[SubscriptionActivation]:
        """Activation with the greatest activated_at; ties go to the later row."""
        async with self._get_session() as session:
            result = await session.execute(
                select(SubscriptionActivationEntity)
                .where(SubscriptionActivationEntity.subscription_id == subscription_id)
                .order_by(
                    SubscriptionActivationEntity.activated_at.desc(),
                    SubscriptionActivationEntity.id.desc(),
                )
                .limit(1)
            )
            db_activation = result.scalar_one_or_none()
            return self._entity_to_domain(db_activation) if db_activation else None
