"""
Domain models for catalog plans and order statuses.
"""

from pydantic import BaseModel


class Plan(BaseModel):
    id: int
    name: str
    price: int  # Minor currency units

    class Config:
        from_attributes = True


class PlanCreateModel(BaseModel):
    """Model for creating a new plan."""

    name: str
    price: int


class OrderStatus(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class OrderStatusCreateModel(BaseModel):
    """Model for creating a new order status row."""

    name: str
