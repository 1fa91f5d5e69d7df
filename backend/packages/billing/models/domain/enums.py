"""
Billing enums - strongly typed enumerations for orders and billing cycles.
"""

from enum import Enum


class BillingCycle(str, Enum):
    """Recurrence unit for a subscription's payment."""

    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


class OrderKind(str, Enum):
    """The billing action an order pays for."""

    SUBSCRIPTION = "SUBSCRIPTION"  # Initial purchase
    UPGRADE = "UPGRADE"  # Plan change on an existing subscription


class OrderStatusName(str, Enum):
    """
    Order lifecycle states. Rows in order_statuses are looked up by these
    names, never by id.

    Flow: PENDING -> COMPLETED | FAILED | CANCELLED
    """

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"  # Reserved for payment integration
    CANCELLED = "CANCELLED"  # Reserved for payment integration

    def is_terminal(self) -> bool:
        return self is not OrderStatusName.PENDING

    def can_transition_to(self, target: "OrderStatusName") -> bool:
        return target in _ALLOWED_TRANSITIONS[self]


_ALLOWED_TRANSITIONS = {
    OrderStatusName.PENDING: frozenset(
        {
            OrderStatusName.COMPLETED,
            OrderStatusName.FAILED,
            OrderStatusName.CANCELLED,
        }
    ),
    OrderStatusName.COMPLETED: frozenset(),
    OrderStatusName.FAILED: frozenset(),
    OrderStatusName.CANCELLED: frozenset(),
}
