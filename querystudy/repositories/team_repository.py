"""팀 레포지토리 — 팀 조회 및 팀별 통계 쿼리.

Team Repository — Team lookups and per-team aggregate queries.
"""

from typing import Any, Sequence

from sqlalchemy import Row, Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from querystudy.models import Member, Team
from querystudy.repositories.base import BaseRepository


class TeamRepository(BaseRepository[Team]):
    """팀 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리."""

    def __init__(self) -> None:
        super().__init__(Team)

    async def get_by_name(self, db: AsyncSession, name: str) -> Team | None:
        """이름으로 팀을 조회합니다."""
        query: Select = select(Team).where(Team.name == name)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_with_members(self, db: AsyncSession, team_id: int) -> Team | None:
        """소속 회원을 함께 로드하여 팀을 조회합니다.

        Retrieve a team with its members collection eagerly loaded.
        """
        query: Select = (
            select(Team)
            .options(selectinload(Team.members))
            .where(Team.id == team_id)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_stats(self, db: AsyncSession) -> Sequence[Row[Any]]:
        """팀별 회원 수와 평균 나이를 조회합니다.

        Per-team member count and average age, ordered by team name.
        Teams without members are omitted by the inner join.

        Returns:
            Sequence[Row]: (team_name, average_age, member_count) 행 목록
        """
        query: Select = (
            select(
                Team.name.label("team_name"),
                func.avg(Member.age).label("average_age"),
                func.count(Member.id).label("member_count"),
            )
            .select_from(Member)
            .join(Member.team)
            .group_by(Team.name)
            .order_by(Team.name)
        )
        result = await db.execute(query)
        return result.all()


# 싱글턴 인스턴스 — Singleton instance
team_repository: TeamRepository = TeamRepository()
