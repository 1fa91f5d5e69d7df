"""
Plans API routes.

Public endpoint for retrieving available subscription plans.
"""

from typing import List

from fastapi import APIRouter, Depends

from packages.billing.models.schemas.billing import PlanResponse
from packages.billing.routes.billing import get_billing_service
from packages.billing.services.billing_service import BillingService

router = APIRouter()


@router.get("", response_model=List[PlanResponse])
async def get_plans(billing_service: BillingService = Depends(get_billing_service)):
    """
    Get all available subscription plans in creation order.

    This endpoint is public (no auth required) for pricing pages.
    """
    plans = await billing_service.list_plans()
    return [PlanResponse.model_validate(plan) for plan in plans]
