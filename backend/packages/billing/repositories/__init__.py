"""Billing repositories."""

from packages.billing.repositories.plan_repository import (
    PlanRepository,
    OrderStatusRepository,
)
from packages.billing.repositories.subscription_repository import SubscriptionRepository
from packages.billing.repositories.order_repository import OrderRepository
from packages.billing.repositories.activation_repository import ActivationRepository

__all__ = [
    "PlanRepository",
    "OrderStatusRepository",
    "SubscriptionRepository",
    "OrderRepository",
    "ActivationRepository",
]
