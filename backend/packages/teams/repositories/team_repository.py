from typing import List
from sqlalchemy import select

from common.repositories.base import BaseRepository
from packages.teams.models.database.team import TeamEntity
from packages.teams.models.domain.team import Team
from common.core.telemetry import trace_span


class TeamRepository(BaseRepository[TeamEntity, Team]):
    def __init__(self):
        super().__init__(TeamEntity, Team)

    @trace_span
    async def get_by_user_id(self, user_id: int) -> List[Team]:
        """Get all teams owned by a user."""
        async with self._get_session() as session:
            result = await session.execute(
                select(TeamEntity)
                .where(TeamEntity.user_id == user_id)
                .order_by(TeamEntity.id)
            )
            return self._entities_to_domain(result.scalars().all())
