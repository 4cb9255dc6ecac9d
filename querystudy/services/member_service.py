"""회원 서비스 — 회원 검색 및 팀 통계 비즈니스 로직.

Member Service — Business logic for member search and team statistics.
Validates search conditions, calls the repositories and wraps paged
results in the Page response model.
"""

from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from querystudy.repositories.member_repository import member_repository
from querystudy.repositories.team_repository import team_repository
from querystudy.schemas.member import (
    MemberSearchCondition,
    MemberTeamDto,
    TeamDetailResponse,
    TeamStatsResponse,
)
from querystudy.utils.exceptions import BadRequestError, NotFoundError
from querystudy.utils.pagination import Page


class MemberService:
    """회원 검색 관련 비즈니스 로직을 처리하는 서비스."""

    def _validate(self, condition: MemberSearchCondition) -> None:
        """나이 범위 조건을 검증합니다.

        Raises:
            BadRequestError: age_goe가 age_loe보다 클 때 (Lower bound above upper bound)
        """
        if (
            condition.age_goe is not None
            and condition.age_loe is not None
            and condition.age_goe > condition.age_loe
        ):
            raise BadRequestError("age_goe must not exceed age_loe")

    async def search(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
    ) -> list[MemberTeamDto]:
        """검색 조건에 맞는 회원 목록을 조회합니다.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 검색 조건 (Search condition, every field optional)

        Returns:
            list[MemberTeamDto]: 회원-팀 프로젝션 목록
        """
        self._validate(condition)
        return await member_repository.search(db, condition)

    async def search_page(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page: int,
        per_page: int,
        skip_count_when_possible: bool = False,
    ) -> Page:
        """검색 결과를 페이지 단위로 조회합니다.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 검색 조건 (Search condition)
            page: 페이지 번호, 1부터 시작 (Page number, 1-based)
            per_page: 페이지당 항목 수 (Items per page)
            skip_count_when_possible: True면 페이지 내용으로 전체 개수가 확정될 때
                개수 쿼리를 생략 (Skip the count query when the page proves the total)

        Returns:
            Page: 페이지 결과 (Paged result)
        """
        self._validate(condition)
        if skip_count_when_possible:
            items, total = await member_repository.search_page_complex(db, condition, page, per_page)
        else:
            items, total = await member_repository.search_page_simple(db, condition, page, per_page)
        return Page.of(items, total, page, per_page)

    async def team_stats(self, db: AsyncSession) -> list[TeamStatsResponse]:
        """팀별 평균 나이와 회원 수를 조회합니다."""
        rows: Sequence = await team_repository.get_stats(db)
        return [
            TeamStatsResponse(
                team_name=row.team_name,
                average_age=float(row.average_age),
                member_count=row.member_count,
            )
            for row in rows
        ]

    async def team_detail(self, db: AsyncSession, team_id: int) -> TeamDetailResponse:
        """팀과 소속 회원을 조회합니다.

        Raises:
            NotFoundError: 팀이 존재하지 않을 때 (Team not found)
        """
        team = await team_repository.get_with_members(db, team_id)
        if team is None:
            raise NotFoundError("Team not found")
        return TeamDetailResponse.model_validate(team)


# 싱글턴 인스턴스 — Singleton instance
member_service: MemberService = MemberService()
