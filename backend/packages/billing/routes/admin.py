"""
Billing administration routes.

Catalog maintenance. The service checks the caller's admin flag.
"""

from fastapi import APIRouter, Depends, status

from packages.auth.dependencies import get_current_active_user
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.billing.models.domain.results import StatusResult
from packages.billing.models.schemas.billing import (
    AddOrderStatusRequest,
    AddPlanRequest,
)
from packages.billing.routes.billing import get_billing_service
from packages.billing.services.billing_service import BillingService

router = APIRouter()


@router.post(
    "/order-statuses",
    response_model=StatusResult,
    status_code=status.HTTP_201_CREATED,
)
async def add_order_status(
    request: AddOrderStatusRequest,
    current_user: AuthenticatedUser = Depends(get_current_active_user),
    billing_service: BillingService = Depends(get_billing_service),
):
    return await billing_service.add_order_status(current_user, request.name)


@router.post("/plans", response_model=StatusResult, status_code=status.HTTP_201_CREATED)
async def add_plan(
    request: AddPlanRequest,
    current_user: AuthenticatedUser = Depends(get_current_active_user),
    billing_service: BillingService = Depends(get_billing_service),
):
    """Add a plan to the catalog. Prices are in minor currency units."""
    return await billing_service.add_plan(
        current_user, name=request.name, price=request.price
    )
