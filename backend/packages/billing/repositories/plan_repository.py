"""
Repositories for the plan catalog and the order status lookup table.
"""

from typing import List, Optional
from sqlalchemy import select

from common.repositories.base import BaseRepository
from common.core.telemetry import trace_span
from packages.billing.models.database.plan import PlanEntity
from packages.billing.models.database.order_status import OrderStatusEntity
from packages.billing.models.domain.plan import Plan, OrderStatus
from packages.billing.models.domain.enums import OrderStatusName


class PlanRepository(BaseRepository[PlanEntity, Plan]):
    """Repository for catalog plans."""

    def __init__(self):
        super().__init__(PlanEntity, Plan)

    @trace_span
    async def list_in_creation_order(self) -> List[Plan]:
        async with self._get_session() as session:
            result = await session.execute(select(PlanEntity).order_by(PlanEntity.id))
            return self._entities_to_domain(result.scalars().all())


class OrderStatusRepository(BaseRepository[OrderStatusEntity, OrderStatus]):
    """Repository for order status rows."""

    def __init__(self):
        super().__init__(OrderStatusEntity, OrderStatus)

    @trace_span
    async def get_by_name(self, name: OrderStatusName) -> Optional[OrderStatus]:
        async with self._get_session() as session:
            result = await session.execute(
                select(OrderStatusEntity).where(OrderStatusEntity.name == name.value)
            )
            db_status = result.scalar_one_or_none()
            return self._entity_to_domain(db_status) if db_status else None
