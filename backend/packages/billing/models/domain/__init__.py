"""Domain models for billing."""

from packages.billing.models.domain.enums import (
    BillingCycle,
    OrderKind,
    OrderStatusName,
)
from packages.billing.models.domain.plan import (
    Plan,
    PlanCreateModel,
    OrderStatus,
    OrderStatusCreateModel,
)
from packages.billing.models.domain.subscription import (
    Subscription,
    SubscriptionCreateModel,
    SubscriptionActivation,
    SubscriptionActivationCreateModel,
)
from packages.billing.models.domain.order import Order, OrderCreateModel
from packages.billing.models.domain.results import (
    StatusResult,
    PriceResult,
)

__all__ = [
    # Enums
    "BillingCycle",
    "OrderKind",
    "OrderStatusName",
    # Catalog
    "Plan",
    "PlanCreateModel",
    "OrderStatus",
    "OrderStatusCreateModel",
    # Subscription
    "Subscription",
    "SubscriptionCreateModel",
    "SubscriptionActivation",
    "SubscriptionActivationCreateModel",
    # Orders
    "Order",
    "OrderCreateModel",
    # Results
    "StatusResult",
    "PriceResult",
]
