"""
Domain models for orders.
"""

from typing import Optional
from pydantic import BaseModel

from packages.billing.models.domain.enums import OrderKind, OrderStatusName
from packages.billing.models.domain.types import UtcDatetime


class Order(BaseModel):
    """One billing transaction attempt, with its status resolved to a name."""

    id: int
    subscription_id: int
    status: OrderStatusName
    kind: OrderKind
    target_plan_id: Optional[int] = None
    quoted_price: Optional[int] = None
    subscription_version: int = 0
    created_at: UtcDatetime
    completed_at: Optional[UtcDatetime] = None


class OrderCreateModel(BaseModel):
    """Model for creating a new order."""

    subscription_id: int
    status_id: int
    kind: OrderKind
    target_plan_id: Optional[int] = None
    quoted_price: Optional[int] = None
    subscription_version: int = 0
    created_at: UtcDatetime
