"""
Unit tests for bearer token authentication.
"""

from datetime import timedelta

import pytest
from fastapi import HTTPException

from packages.auth.services.token_auth_service import TokenAuthService


@pytest.fixture
def auth_service():
    return TokenAuthService()


@pytest.mark.asyncio
class TestTokenAuthService:
    async def test_round_trip(self, auth_service, test_user_record):
        token = auth_service.issue_token(test_user_record.id)

        user = await auth_service.authenticate_user_from_token(token)

        assert user.user_id == test_user_record.id
        assert user.is_admin is False

    async def test_admin_flag_comes_from_record(self, auth_service, admin_user_record):
        token = auth_service.issue_token(admin_user_record.id)

        user = await auth_service.authenticate_user_from_token(token)

        assert user.is_admin is True

    async def test_expired_token(self, auth_service, test_user_record):
        token = auth_service.issue_token(test_user_record.id, ttl=timedelta(seconds=-5))

        with pytest.raises(HTTPException) as exc_info:
            await auth_service.authenticate_user_from_token(token)

        assert exc_info.value.status_code == 401

    async def test_garbage_token(self, auth_service):
        with pytest.raises(HTTPException) as exc_info:
            await auth_service.authenticate_user_from_token("not-a-jwt")

        assert exc_info.value.status_code == 401

    async def test_unknown_user(self, auth_service):
        token = auth_service.issue_token(123456)

        with pytest.raises(HTTPException) as exc_info:
            await auth_service.authenticate_user_from_token(token)

        assert exc_info.value.status_code == 401


@pytest.mark.asyncio
class TestBearerDependency:
    """End-to-end through the real dependency chain, no overrides."""

    async def test_valid_bearer_token(self, anonymous_client, test_user_record, sample_team):
        token = TokenAuthService().issue_token(test_user_record.id)

        response = await anonymous_client.get(
            "/api/v1/teams", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 200
        assert [t["id"] for t in response.json()] == [sample_team.id]

    async def test_missing_header(self, anonymous_client):
        response = await anonymous_client.get("/api/v1/teams")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    async def test_wrong_scheme(self, anonymous_client, test_user_record):
        token = TokenAuthService().issue_token(test_user_record.id)

        response = await anonymous_client.get(
            "/api/v1/teams", headers={"Authorization": f"Token {token}"}
        )

        assert response.status_code == 401
