import pytest

from common.core.exceptions import ValidationError
from packages.users.models.domain.user import UserCreateModel
from packages.users.repositories.user_repository import UserRepository
from packages.users.services.user_service import UserService


@pytest.mark.asyncio
class TestUserService:
    async def test_create_user(self):
        user = await UserService().create_user(
            UserCreateModel(email="new@acme.io", name="New User")
        )

        assert user.id is not None
        assert user.is_admin is False
        assert (await UserRepository().get_by_email("new@acme.io")).id == user.id

    async def test_duplicate_email(self, test_user_record):
        with pytest.raises(ValidationError):
            await UserService().create_user(
                UserCreateModel(email=test_user_record.email, name="Again")
            )
