from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import HTTPException, status

from common.core.config import settings
from common.core.telemetry import trace_span, get_logger
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.users.services.user_service import UserService

logger = get_logger(__name__)


class TokenAuthService:
    """Bearer token authentication against the local user table.

    Tokens are HS256 JWTs whose ``sub`` claim is the user id. The admin flag
    is always read from the user record, never from the token.
    """

    def __init__(self):
        self.user_service = UserService()

    def issue_token(self, user_id: int, ttl: Optional[timedelta] = None) -> str:
        now = datetime.now(timezone.utc)
        expires = now + (ttl or timedelta(minutes=settings.auth_token_ttl_minutes))
        claims = {"sub": str(user_id), "iat": now, "exp": expires}
        return jwt.encode(
            claims, settings.auth_token_secret, algorithm=settings.auth_token_algorithm
        )

    @trace_span
    async def authenticate_user_from_token(self, token: str) -> AuthenticatedUser:
        try:
            claims = jwt.decode(
                token,
                settings.auth_token_secret,
                algorithms=[settings.auth_token_algorithm],
                options={"require": ["sub", "exp"]},
            )
            user_id = int(claims["sub"])
        except (jwt.PyJWTError, ValueError) as e:
            logger.warning(f"Rejected bearer token: {e}")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token",
                headers={"WWW-Authenticate": "Bearer"},
            )

        user = await self.user_service.get_user(user_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Unknown user",
                headers={"WWW-Authenticate": "Bearer"},
            )

        return AuthenticatedUser(user_id=user.id, is_admin=user.is_admin)
