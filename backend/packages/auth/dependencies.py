from typing import Annotated, Optional
from fastapi import Depends, HTTPException, status, Header

from common.core.telemetry import trace_span, get_logger
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.auth.services.token_auth_service import TokenAuthService

logger = get_logger(__name__)


def get_token_auth_service() -> TokenAuthService:
    """Get TokenAuthService instance."""
    return TokenAuthService()


@trace_span
async def get_current_user(
    authorization: Annotated[Optional[str], Header()] = None,
    auth_service: TokenAuthService = Depends(get_token_auth_service),
) -> AuthenticatedUser:
    """Get current authenticated user from the bearer token."""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header missing or invalid",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = authorization.split(" ", 1)[1]

    return await auth_service.authenticate_user_from_token(token)


@trace_span
async def get_current_active_user(
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> AuthenticatedUser:
    """Get current active user."""
    logger.debug(f"Authenticated user_id={current_user.user_id}")
    return current_user

