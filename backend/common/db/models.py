"""Imports every entity module so Base.metadata knows all tables."""

from packages.users.models.database.user import UserEntity  # noqa: F401
from packages.teams.models.database.team import TeamEntity  # noqa: F401
from packages.billing.models.database import (  # noqa: F401
    OrderEntity,
    OrderStatusEntity,
    PlanEntity,
    SubscriptionActivationEntity,
    SubscriptionEntity,
)
