"""
Billing API routes.

Protected endpoints for the subscription lifecycle. Every call acts on behalf
of the authenticated user; subscriptions owned by someone else answer 403.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from packages.auth.dependencies import get_current_active_user
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.billing.models.domain.results import PriceResult, StatusResult
from packages.billing.models.schemas.billing import (
    ActivationResponse,
    ConfirmPaymentRequest,
    ConfirmUpgradeRequest,
    OrderResponse,
    OrderSubscriptionRequest,
    UpgradePlanRequest,
)
from packages.billing.services.billing_service import BillingService

router = APIRouter()


def get_billing_service() -> BillingService:
    return BillingService()


# ============================================================================
# Subscription Lifecycle
# ============================================================================


@router.post(
    "/subscriptions",
    response_model=StatusResult,
    status_code=status.HTTP_201_CREATED,
)
async def order_subscription(
    request: OrderSubscriptionRequest,
    current_user: AuthenticatedUser = Depends(get_current_active_user),
    billing_service: BillingService = Depends(get_billing_service),
):
    """
    Subscribe one of the caller's teams to a plan.

    Creates the subscription together with a PENDING purchase order. Nothing
    is billable until the payment is confirmed.
    """
    return await billing_service.order_subscription(
        current_user, team_id=request.team_id, plan_id=request.plan_id
    )


@router.post("/subscriptions/{subscription_id}/confirm-payment", response_model=StatusResult)
async def confirm_order_payment(
    subscription_id: int,
    request: ConfirmPaymentRequest,
    current_user: AuthenticatedUser = Depends(get_current_active_user),
    billing_service: BillingService = Depends(get_billing_service),
):
    """Complete the pending purchase order and start the first billing cycle."""
    return await billing_service.confirm_order_payment(
        current_user, subscription_id, billing_cycle=request.billing_cycle
    )


@router.post("/subscriptions/{subscription_id}/upgrade", response_model=PriceResult)
async def upgrade_plan_request(
    subscription_id: int,
    request: UpgradePlanRequest,
    current_user: AuthenticatedUser = Depends(get_current_active_user),
    billing_service: BillingService = Depends(get_billing_service),
):
    """
    Quote an upgrade to another plan.

    Opens a PENDING upgrade order and returns the prorated price owed for the
    rest of the current cycle. A negative value is a credit.
    """
    return await billing_service.upgrade_plan_request(
        current_user, subscription_id, plan_id=request.plan_id
    )


@router.post("/subscriptions/{subscription_id}/confirm-upgrade", response_model=StatusResult)
async def confirm_upgrade_payment(
    subscription_id: int,
    request: ConfirmUpgradeRequest,
    current_user: AuthenticatedUser = Depends(get_current_active_user),
    billing_service: BillingService = Depends(get_billing_service),
):
    """Apply a paid upgrade. Answers 409 if the quote has gone stale."""
    return await billing_service.confirm_upgrade_payment(
        current_user,
        subscription_id,
        plan_id=request.plan_id,
        billing_cycle=request.billing_cycle,
    )


# ============================================================================
# History
# ============================================================================


@router.get("/subscriptions/{subscription_id}/orders", response_model=List[OrderResponse])
async def get_order_history(
    subscription_id: int,
    current_user: AuthenticatedUser = Depends(get_current_active_user),
    billing_service: BillingService = Depends(get_billing_service),
):
    orders = await billing_service.get_order_history(current_user, subscription_id)
    return [OrderResponse.model_validate(order) for order in orders]


@router.get("/subscriptions/{subscription_id}/activation", response_model=ActivationResponse)
async def get_current_activation(
    subscription_id: int,
    current_user: AuthenticatedUser = Depends(get_current_active_user),
    billing_service: BillingService = Depends(get_billing_service),
):
    """Latest activation, i.e. the start of the current billing cycle."""
    activation = await billing_service.get_current_activation(
        current_user, subscription_id
    )
    return ActivationResponse.model_validate(activation)
