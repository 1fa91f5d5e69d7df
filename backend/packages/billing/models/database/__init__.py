"""Database models for billing."""

from packages.billing.models.database.plan import PlanEntity
from packages.billing.models.database.order_status import OrderStatusEntity
from packages.billing.models.database.subscription import SubscriptionEntity
from packages.billing.models.database.order import OrderEntity
from packages.billing.models.database.subscription_activation import (
    SubscriptionActivationEntity,
)

__all__ = [
    "PlanEntity",
    "OrderStatusEntity",
    "SubscriptionEntity",
    "OrderEntity",
    "SubscriptionActivationEntity",
]
