from fastapi import APIRouter, Depends

from api.v1.routes import (
    health,
)
from packages.auth.dependencies import get_current_active_user
from packages.billing.routes import admin, billing, plans
from packages.teams.routes import teams

api_router = APIRouter()

# Health check (no auth required)
api_router.include_router(health.router, prefix="/health", tags=["health"])

# Plans (no auth - public pricing info)
api_router.include_router(plans.router, prefix="/billing/plans", tags=["billing"])

# Protected routes (require auth)
api_router.include_router(
    teams.router,
    prefix="/teams",
    tags=["teams"],
    dependencies=[Depends(get_current_active_user)],
)
api_router.include_router(
    billing.router,
    prefix="/billing",
    tags=["billing"],
    dependencies=[Depends(get_current_active_user)],
)

# Admin checks happen in the billing service against the user record
api_router.include_router(
    admin.router,
    prefix="/billing/admin",
    tags=["billing-admin"],
    dependencies=[Depends(get_current_active_user)],
)
