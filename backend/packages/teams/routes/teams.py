"""
Team API routes.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from packages.auth.dependencies import get_current_active_user
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.teams.models.schemas.team import TeamCreateRequest, TeamResponse
from packages.teams.services.team_service import TeamService

router = APIRouter()


def get_team_service() -> TeamService:
    return TeamService()


@router.post("", response_model=TeamResponse, status_code=status.HTTP_201_CREATED)
async def create_team(
    request: TeamCreateRequest,
    current_user: AuthenticatedUser = Depends(get_current_active_user),
    team_service: TeamService = Depends(get_team_service),
):
    """Create a team owned by the current user."""
    team = await team_service.create_team(
        current_user, name=request.name, is_personal=request.is_personal
    )
    return TeamResponse.model_validate(team)


@router.get("", response_model=List[TeamResponse])
async def list_teams(
    current_user: AuthenticatedUser = Depends(get_current_active_user),
    team_service: TeamService = Depends(get_team_service),
):
    """List the current user's teams."""
    teams = await team_service.list_teams(current_user)
    return [TeamResponse.model_validate(team) for team in teams]
