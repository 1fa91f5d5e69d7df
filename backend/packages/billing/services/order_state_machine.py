"""
Order lifecycle: PENDING -> COMPLETED (FAILED / CANCELLED reserved).
"""

from datetime import datetime
from typing import Callable, List, Optional

from common.core.exceptions import (
    InvalidStateTransitionError,
    NoPendingOrderError,
    NotFoundError,
)
from common.core.telemetry import trace_span, get_logger
from common.db.errors import store_errors
from packages.billing.models.domain.enums import OrderKind, OrderStatusName
from packages.billing.models.domain.order import Order, OrderCreateModel
from packages.billing.models.domain.plan import OrderStatus
from packages.billing.repositories.order_repository import OrderRepository
from packages.billing.repositories.plan_repository import OrderStatusRepository
from packages.billing.services.activation_tracker import utc_now

logger = get_logger(__name__)


class OrderStateMachine:
    """
    Creates orders and moves them between states.

    Status rows are resolved by name on every call, so nothing depends on the
    order in which the order_statuses table was seeded.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self.order_repo = OrderRepository()
        self.status_repo = OrderStatusRepository()
        self.clock = clock

    async def _resolve_status(self, name: OrderStatusName) -> OrderStatus:
        status = await self.status_repo.get_by_name(name)
        if status is None:
            raise NotFoundError(f"Order status {name.value} is not configured")
        return status

    @trace_span
    async def create_order(
        self,
        subscription_id: int,
        kind: OrderKind = OrderKind.SUBSCRIPTION,
        target_plan_id: Optional[int] = None,
        quoted_price: Optional[int] = None,
        subscription_version: int = 0,
    ) -> Order:
        pending = await self._resolve_status(OrderStatusName.PENDING)
        async with store_errors("create_order"):
            order = await self.order_repo.create(
                OrderCreateModel(
                    subscription_id=subscription_id,
                    status_id=pending.id,
                    kind=kind,
                    target_plan_id=target_plan_id,
                    quoted_price=quoted_price,
                    subscription_version=subscription_version,
                    created_at=self.clock(),
                )
            )
        logger.info(
            f"Created {kind.value} order {order.id} for subscription {subscription_id}",
            extra={"order_id": order.id, "subscription_id": subscription_id},
        )
        return order

    @trace_span
    async def transition(self, order: Order, target: OrderStatusName) -> Order:
        """Move order to target if the transition is allowed from its current state."""
        if not order.status.can_transition_to(target):
            raise InvalidStateTransitionError(
                f"Order {order.id} cannot move from {order.status.value} to {target.value}"
            )

        current = await self._resolve_status(order.status)
        new = await self._resolve_status(target)
        completed_at = self.clock() if target.is_terminal() else None

        moved = await self.order_repo.set_status(
            order.id, current.id, new.id, completed_at=completed_at
        )
        if not moved:
            raise InvalidStateTransitionError(
                f"Order {order.id} is no longer {order.status.value}"
            )

        logger.info(
            f"Order {order.id}: {order.status.value} -> {target.value}",
            extra={"order_id": order.id, "subscription_id": order.subscription_id},
        )
        return await self.order_repo.get(order.id)

    @trace_span
    async def complete_order(
        self,
        subscription_id: int,
        kind: Optional[OrderKind] = None,
        target_plan_id: Optional[int] = None,
    ) -> Order:
        """
        Complete the most recent PENDING order of the subscription.

        Callers must pair this with an activation in the same transaction.
        Raises NoPendingOrderError when there is nothing to complete.
        """
        order = await self.order_repo.find_latest_with_status(
            subscription_id,
            OrderStatusName.PENDING,
            kind=kind,
            target_plan_id=target_plan_id,
        )
        if order is None:
            raise NoPendingOrderError(
                f"Subscription {subscription_id} has no pending order to complete"
            )
        return await self.transition(order, OrderStatusName.COMPLETED)

    @trace_span
    async def order_history(self, subscription_id: int) -> List[Order]:
        return await self.order_repo.get_by_subscription(subscription_id)
