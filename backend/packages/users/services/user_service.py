from typing import Optional

from packages.users.repositories.user_repository import UserRepository
from packages.users.models.domain.user import User, UserCreateModel
from common.core.exceptions import ValidationError
from common.core.telemetry import trace_span, get_logger
from common.db.scoped import transaction

logger = get_logger(__name__)


class UserService:
    """Service for handling user records."""

    def __init__(self):
        self.user_repo = UserRepository()

    @trace_span
    async def create_user(self, user_data: UserCreateModel) -> User:
        """Create a new user."""
        logger.info(f"Creating user: {user_data.email}")

        async with transaction():
            existing = await self.user_repo.get_by_email(user_data.email)
            if existing:
                raise ValidationError(
                    f"User with email '{user_data.email}' already exists"
                )
            user = await self.user_repo.create(user_data)

        logger.info(f"Created user with ID: {user.id}")
        return user

    @trace_span
    async def get_user(self, user_id: int) -> Optional[User]:
        """Get a user by ID."""
        return await self.user_repo.get(user_id)
