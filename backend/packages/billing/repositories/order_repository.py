"""
Repository for orders.

Orders are always read joined with their status row so callers see the
status by name.
"""

from datetime import datetime
from typing import List, Optional
from sqlalchemy import select, update

from common.repositories.base import BaseRepository
from common.core.telemetry import trace_span
from packages.billing.models.database.order import OrderEntity
from packages.billing.models.database.order_status import OrderStatusEntity
from packages.billing.models.domain.order import Order, OrderCreateModel
from packages.billing.models.domain.enums import OrderKind, OrderStatusName


class OrderRepository(BaseRepository[OrderEntity, Order]):
    """Repository for billing orders."""

    def __init__(self):
        super().__init__(OrderEntity, Order)

    def _row_to_domain(self, entity: OrderEntity, status_name: str) -> Order:
        return Order(
            id=entity.id,
            subscription_id=entity.subscription_id,
            status=OrderStatusName(status_name),
            kind=OrderKind(entity.kind),
            target_plan_id=entity.target_plan_id,
            quoted_price=entity.quoted_price,
            subscription_version=entity.subscription_version,
            created_at=entity.created_at,
            completed_at=entity.completed_at,
        )

    def _select_with_status(self):
        return select(OrderEntity, OrderStatusEntity.name).join(
            OrderStatusEntity, OrderEntity.status_id == OrderStatusEntity.id
        )

    @trace_span
    async def get(self, id: int) -> Optional[Order]:
        async with self._get_session() as session:
            result = await session.execute(
                self._select_with_status().where(OrderEntity.id == id)
            )
            row = result.one_or_none()
            return self._row_to_domain(*row) if row else None

    @trace_span
    async def create(self, create_model: OrderCreateModel) -> Order:
        db_order = OrderEntity(
            subscription_id=create_model.subscription_id,
            status_id=create_model.status_id,
            kind=create_model.kind.value,
            target_plan_id=create_model.target_plan_id,
            quoted_price=create_model.quoted_price,
            subscription_version=create_model.subscription_version,
            created_at=create_model.created_at,
        )
        async with self._get_session() as session:
            session.add(db_order)
            await session.flush()
        return await self.get(db_order.id)

    @trace_span
    async def find_latest_with_status(
        self,
        subscription_id: int,
        status: OrderStatusName,
        kind: Optional[OrderKind] = None,
        target_plan_id: Optional[int] = None,
    ) -> Optional[Order]:
        """Most recent order (by created_at, then id) in the given status."""
        query = self._select_with_status().where(
            OrderEntity.subscription_id == subscription_id,
            OrderStatusEntity.name == status.value,
        )
        if kind is not None:
            query = query.where(OrderEntity.kind == kind.value)
        if target_plan_id is not None:
            query = query.where(OrderEntity.target_plan_id == target_plan_id)
        query = query.order_by(
            OrderEntity.created_at.desc(), OrderEntity.id.desc()
        ).limit(1)

        async with self._get_session() as session:
            result = await session.execute(query)
            row = result.one_or_none()
            return self._row_to_domain(*row) if row else None

    @trace_span
    async def set_status(
        self,
        order_id: int,
        expected_status_id: int,
        new_status_id: int,
        completed_at: Optional[datetime] = None,
    ) -> bool:
        """Compare-and-set the status. False if the order already moved on."""
        async with self._get_session() as session:
            result = await session.execute(
                update(OrderEntity)
                .where(
                    OrderEntity.id == order_id,
                    OrderEntity.status_id == expected_status_id,
                )
                .values(status_id=new_status_id, completed_at=completed_at)
            )
            await session.flush()
            return result.rowcount == 1

    @trace_span
    async def get_by_subscription(self, subscription_id: int) -> List[Order]:
        """All orders for a subscription, oldest first."""
        async with self._get_session() as session:
            result = await session.execute(
                self._select_with_status()
                .where(OrderEntity.subscription_id == subscription_id)
                .order_by(OrderEntity.created_at, OrderEntity.id)
            )
            return [self._row_to_domain(*row) for row in result.all()]
