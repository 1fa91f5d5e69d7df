"""
Domain models for subscriptions and their activations.
"""

from pydantic import BaseModel

from packages.billing.models.domain.enums import BillingCycle
from packages.billing.models.domain.types import UtcDatetime


class Subscription(BaseModel):
    """
    A team's current plan assignment.

    Plan history is reconstructed from orders and activations, not stored here.
    """

    id: int
    user_id: int
    team_id: int
    plan_id: int
    version: int = 0

    class Config:
        from_attributes = True

    def is_owned_by(self, user_id: int) -> bool:
        return self.user_id == user_id


class SubscriptionCreateModel(BaseModel):
    """Model for creating a new subscription."""

    user_id: int
    team_id: int
    plan_id: int


class SubscriptionActivation(BaseModel):
    """Start of a paid billing period."""

    id: int
    subscription_id: int
    plan_id: int
    activated_at: UtcDatetime
    billing_cycle: BillingCycle

    class Config:
        from_attributes = True


class SubscriptionActivationCreateModel(BaseModel):
    """Model for creating a new activation."""

    subscription_id: int
    plan_id: int
    activated_at: UtcDatetime
    billing_cycle: BillingCycle

