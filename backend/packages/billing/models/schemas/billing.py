"""
API schemas for billing operations.

Request and response models for billing endpoints.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from packages.billing.models.domain.enums import (
    BillingCycle,
    OrderKind,
    OrderStatusName,
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _CamelResponse(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


# ============================================================================
# Subscription Schemas
# ============================================================================


class OrderSubscriptionRequest(_CamelModel):
    """Request to subscribe a team to a plan."""

    team_id: int
    plan_id: int


class ConfirmPaymentRequest(_CamelModel):
    """Payment confirmation for the pending purchase order."""

    billing_cycle: BillingCycle


class UpgradePlanRequest(_CamelModel):
    plan_id: int


class ConfirmUpgradeRequest(_CamelModel):
    """Payment confirmation for a quoted upgrade."""

    plan_id: int
    billing_cycle: BillingCycle


# ============================================================================
# Read Schemas
# ============================================================================


class OrderResponse(_CamelResponse):
    id: int
    subscription_id: int
    status: OrderStatusName
    kind: OrderKind
    target_plan_id: Optional[int] = None
    quoted_price: Optional[int] = None
    created_at: datetime
    completed_at: Optional[datetime] = None


class ActivationResponse(_CamelResponse):
    id: int
    subscription_id: int
    plan_id: int
    activated_at: datetime
    billing_cycle: BillingCycle


class PlanResponse(_CamelResponse):
    id: int
    name: str
    price: int = Field(..., description="Price in minor currency units")


# ============================================================================
# Admin Schemas
# ============================================================================


class AddPlanRequest(_CamelModel):
    name: str
    price: int


class AddOrderStatusRequest(_CamelModel):
    name: str
