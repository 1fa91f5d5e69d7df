"""Billing services."""

from packages.billing.services.activation_tracker import ActivationTracker
from packages.billing.services.billing_service import BillingService
from packages.billing.services.order_state_machine import OrderStateMachine
from packages.billing.services.proration import ProrationCalculator, ProrationQuote

__all__ = [
    "ActivationTracker",
    "BillingService",
    "OrderStateMachine",
    "ProrationCalculator",
    "ProrationQuote",
]
