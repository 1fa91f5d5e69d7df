from typing import List

from common.core.telemetry import trace_span, get_logger
from common.db.scoped import transaction
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.teams.models.domain.team import Team, TeamCreateModel
from packages.teams.repositories.team_repository import TeamRepository

logger = get_logger(__name__)


class TeamService:
    """Service for teams owned by users."""

    def __init__(self):
        self.team_repo = TeamRepository()

    @trace_span
    async def create_team(
        self, user: AuthenticatedUser, name: str, is_personal: bool = False
    ) -> Team:
        """Create a team owned by the calling user."""
        async with transaction():
            team = await self.team_repo.create(
                TeamCreateModel(name=name, is_personal=is_personal, user_id=user.user_id)
            )

        logger.info(
            f"Created team {team.id} for user {user.user_id}",
            extra={"team_id": team.id, "user_id": user.user_id},
        )
        return team

    @trace_span
    async def list_teams(self, user: AuthenticatedUser) -> List[Team]:
        return await self.team_repo.get_by_user_id(user.user_id)
