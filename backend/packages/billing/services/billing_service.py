"""
Billing facade: the public operations over subscriptions, orders and plans.

Each mutation runs in exactly one transaction(); any failure rolls the whole
operation back and propagates as a typed AppException. Store failures surface
as PersistenceError, never as a {success: false} flag.
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncGenerator, Callable, List, Optional

from common.core.exceptions import (
    ConcurrentModificationError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from common.core.telemetry import trace_span, get_logger, log_span_event
from common.db.context import readonly
from common.db.errors import store_errors
from common.db.scoped import transaction
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.billing.models.domain.enums import (
    BillingCycle,
    OrderKind,
    OrderStatusName,
)
from packages.billing.models.domain.order import Order
from packages.billing.models.domain.plan import (
    Plan,
    PlanCreateModel,
    OrderStatusCreateModel,
)
from packages.billing.models.domain.results import PriceResult, StatusResult
from packages.billing.models.domain.subscription import (
    Subscription,
    SubscriptionActivation,
    SubscriptionCreateModel,
)
from packages.billing.repositories.plan_repository import (
    PlanRepository,
    OrderStatusRepository,
)
from packages.billing.repositories.subscription_repository import SubscriptionRepository
from packages.billing.services.activation_tracker import ActivationTracker, utc_now
from packages.billing.services.order_state_machine import OrderStateMachine
from packages.billing.services.proration import ProrationCalculator
from packages.teams.repositories.team_repository import TeamRepository
from packages.users.repositories.user_repository import UserRepository

logger = get_logger(__name__)


class BillingService:
    """Subscription lifecycle and upgrade pricing."""

    def __init__(
        self,
        clock: Callable[[], datetime] = utc_now,
        proration: Optional[ProrationCalculator] = None,
    ):
        self.clock = clock
        self.plan_repo = PlanRepository()
        self.status_repo = OrderStatusRepository()
        self.subscription_repo = SubscriptionRepository()
        self.team_repo = TeamRepository()
        self.user_repo = UserRepository()
        self.orders = OrderStateMachine(clock)
        self.activations = ActivationTracker(clock)
        self.proration = proration or ProrationCalculator()

    @asynccontextmanager
    async def _unit_of_work(self, operation: str) -> AsyncGenerator[None, None]:
        async with store_errors(operation):
            async with transaction():
                yield

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    async def _is_admin(self, user: AuthenticatedUser) -> bool:
        """The admin flag is read from the caller's user record."""
        record = await self.user_repo.get(user.user_id)
        return record is not None and record.is_admin

    async def _require_admin(self, user: AuthenticatedUser) -> None:
        if not await self._is_admin(user):
            logger.warning(f"User {user.user_id} denied admin billing operation")
            raise ForbiddenError("Administrator privileges required")

    async def _load_subscription(
        self, user: AuthenticatedUser, subscription_id: int
    ) -> Subscription:
        subscription = await self.subscription_repo.get(subscription_id)
        if subscription is None:
            raise NotFoundError(f"Subscription {subscription_id} not found")
        if not subscription.is_owned_by(user.user_id) and not await self._is_admin(
            user
        ):
            raise ForbiddenError(
                f"Subscription {subscription_id} does not belong to user {user.user_id}"
            )
        return subscription

    async def _load_plan(self, plan_id: int) -> Plan:
        plan = await self.plan_repo.get(plan_id)
        if plan is None:
            raise NotFoundError(f"Plan {plan_id} not found")
        return plan

    # ------------------------------------------------------------------
    # Subscription lifecycle
    # ------------------------------------------------------------------

    @trace_span
    async def order_subscription(
        self, user: AuthenticatedUser, team_id: int, plan_id: int
    ) -> StatusResult:
        """Create a subscription for the team and its PENDING purchase order."""
        async with self._unit_of_work("order_subscription"):
            team = await self.team_repo.get(team_id)
            if team is None:
                raise NotFoundError(f"Team {team_id} not found")
            if not team.is_owned_by(user.user_id) and not await self._is_admin(user):
                raise ForbiddenError(f"Team {team_id} does not belong to user")
            await self._load_plan(plan_id)

            subscription = await self.subscription_repo.create(
                SubscriptionCreateModel(
                    user_id=user.user_id, team_id=team_id, plan_id=plan_id
                )
            )
            order = await self.orders.create_order(
                subscription.id, kind=OrderKind.SUBSCRIPTION
            )

        log_span_event(
            "Subscription ordered",
            {
                "subscription_id": subscription.id,
                "order_id": order.id,
                "plan_id": plan_id,
            },
        )
        return StatusResult(subscription_id=subscription.id, order_id=order.id)

    @trace_span
    async def confirm_order_payment(
        self,
        user: AuthenticatedUser,
        subscription_id: int,
        billing_cycle: BillingCycle,
    ) -> StatusResult:
        """Complete the pending purchase order and start the first billing cycle."""
        async with self._unit_of_work("confirm_order_payment"):
            subscription = await self._load_subscription(user, subscription_id)
            order = await self.orders.complete_order(
                subscription_id, kind=OrderKind.SUBSCRIPTION
            )
            await self.activations.activate(
                subscription_id, subscription.plan_id, billing_cycle
            )

        log_span_event(
            "Subscription payment confirmed",
            {"subscription_id": subscription_id, "order_id": order.id},
        )
        return StatusResult(subscription_id=subscription_id, order_id=order.id)

    @trace_span
    async def upgrade_plan_request(
        self, user: AuthenticatedUser, subscription_id: int, plan_id: int
    ) -> PriceResult:
        """
        Open a PENDING upgrade order and quote the prorated price.

        The quote is computed against the pre-upgrade plan and activation and
        stored on the order together with the subscription version it was
        based on.
        """
        async with self._unit_of_work("upgrade_plan_request"):
            subscription = await self._load_subscription(user, subscription_id)
            target = await self._load_plan(plan_id)
            if target.id == subscription.plan_id:
                raise ValidationError(
                    f"Subscription {subscription_id} is already on plan {plan_id}"
                )

            prorated_price = await self.quote_upgrade(subscription_id, target.price)
            order = await self.orders.create_order(
                subscription_id,
                kind=OrderKind.UPGRADE,
                target_plan_id=target.id,
                quoted_price=prorated_price,
                subscription_version=subscription.version,
            )

        logger.info(
            f"Quoted upgrade of subscription {subscription_id} to plan {plan_id}: {prorated_price}",
            extra={
                "subscription_id": subscription_id,
                "order_id": order.id,
                "prorated_price": prorated_price,
            },
        )
        return PriceResult(value=prorated_price, order_id=order.id)

    @trace_span
    async def quote_upgrade(self, subscription_id: int, target_price: int) -> int:
        """
        Prorated price of moving the subscription to a plan costing target_price.

        Returns 0 when the subscription has no current plan or has never been
        activated; there is no cycle to prorate against.
        """
        current = await self.subscription_repo.get_with_plan_price(subscription_id)
        if current is None:
            logger.warning(
                f"No current plan for subscription {subscription_id}; quoting 0"
            )
            return 0
        _, current_price = current

        activation = await self.activations.find_latest_activation(subscription_id)
        if activation is None:
            logger.warning(
                f"Subscription {subscription_id} never activated; quoting 0"
            )
            return 0

        return self.proration.prorated_price(
            current_price, target_price, activation.activated_at, self.clock()
        )

    @trace_span
    async def confirm_upgrade_payment(
        self,
        user: AuthenticatedUser,
        subscription_id: int,
        plan_id: int,
        billing_cycle: BillingCycle,
    ) -> StatusResult:
        """
        Switch the subscription to the paid-for plan and start a new cycle.

        Fails with ConcurrentModificationError when the plan changed after the
        upgrade was quoted; the caller must request a fresh quote.
        """
        async with self._unit_of_work("confirm_upgrade_payment"):
            await self._load_subscription(user, subscription_id)
            await self._load_plan(plan_id)

            order = await self.orders.complete_order(
                subscription_id, kind=OrderKind.UPGRADE, target_plan_id=plan_id
            )
            changed = await self.subscription_repo.change_plan(
                subscription_id, plan_id, expected_version=order.subscription_version
            )
            if not changed:
                raise ConcurrentModificationError(
                    f"Subscription {subscription_id} changed since order {order.id} was quoted"
                )
            await self.activations.activate(subscription_id, plan_id, billing_cycle)

        log_span_event(
            "Upgrade payment confirmed",
            {
                "subscription_id": subscription_id,
                "order_id": order.id,
                "plan_id": plan_id,
            },
        )
        return StatusResult(subscription_id=subscription_id, order_id=order.id)

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @trace_span
    async def get_order_history(
        self, user: AuthenticatedUser, subscription_id: int
    ) -> List[Order]:
        """Every order placed for the subscription, oldest first."""
        await self._load_subscription(user, subscription_id)
        return await self.orders.order_history(subscription_id)

    @trace_span
    async def get_current_activation(
        self, user: AuthenticatedUser, subscription_id: int
    ) -> SubscriptionActivation:
        await self._load_subscription(user, subscription_id)
        return await self.activations.latest_activation(subscription_id)

    @trace_span
    @readonly
    async def list_plans(self) -> List[Plan]:
        """All plans in creation order. No authentication required."""
        return await self.plan_repo.list_in_creation_order()

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    @trace_span
    async def add_order_status(self, user: AuthenticatedUser, name: str) -> StatusResult:
        async with self._unit_of_work("add_order_status"):
            await self._require_admin(user)
            try:
                status_name = OrderStatusName(name.strip().upper())
            except ValueError:
                raise ValidationError(
                    f"Unknown order status '{name}'. Expected one of: "
                    f"{', '.join(s.value for s in OrderStatusName)}"
                )
            status = await self.status_repo.create(
                OrderStatusCreateModel(name=status_name.value)
            )

        logger.info(f"Added order status {status.name} (id={status.id})")
        return StatusResult()

    @trace_span
    async def add_plan(
        self, user: AuthenticatedUser, name: str, price: int
    ) -> StatusResult:
        async with self._unit_of_work("add_plan"):
            await self._require_admin(user)
            if not name.strip():
                raise ValidationError("Plan name must not be empty")
            if price < 0:
                raise ValidationError("Plan price must not be negative")
            plan = await self.plan_repo.create(PlanCreateModel(name=name, price=price))

        logger.info(f"Added plan {plan.name} (id={plan.id}, price={plan.price})")
        return StatusResult()
