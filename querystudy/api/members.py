"""회원 검색 라우터 — 목록, 단순 페이징, 최적화 페이징 엔드포인트.

Member Search Router — list, simple paging and count-optimized paging endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from querystudy.config import settings
from querystudy.database import get_db
from querystudy.schemas.member import MemberSearchCondition, MemberTeamDto
from querystudy.services.member_service import member_service
from querystudy.utils.pagination import Page

router: APIRouter = APIRouter()


def search_condition(
    username: Annotated[str | None, Query(description="회원 이름")] = None,
    team_name: Annotated[str | None, Query(description="팀 이름")] = None,
    age_goe: Annotated[int | None, Query(ge=0, description="최소 나이")] = None,
    age_loe: Annotated[int | None, Query(ge=0, description="최대 나이")] = None,
) -> MemberSearchCondition:
    """쿼리 파라미터로 검색 조건을 생성합니다."""
    return MemberSearchCondition(
        username=username,
        team_name=team_name,
        age_goe=age_goe,
        age_loe=age_loe,
    )


@router.get("/v1/members", response_model=list[MemberTeamDto])
async def search_members(
    db: Annotated[AsyncSession, Depends(get_db)],
    condition: Annotated[MemberSearchCondition, Depends(search_condition)],
) -> list[MemberTeamDto]:
    """검색 조건에 맞는 전체 회원 목록을 조회합니다."""
    return await member_service.search(db, condition)


@router.get("/v2/members", response_model=Page)
async def search_members_page(
    db: Annotated[AsyncSession, Depends(get_db)],
    condition: Annotated[MemberSearchCondition, Depends(search_condition)],
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=100)] = settings.DEFAULT_PAGE_SIZE,
) -> Page:
    """검색 결과를 페이지로 조회합니다. 전체 개수 쿼리를 항상 실행합니다."""
    return await member_service.search_page(db, condition, page, per_page)


@router.get("/v3/members", response_model=Page)
async def search_members_page_optimized(
    db: Annotated[AsyncSession, Depends(get_db)],
    condition: Annotated[MemberSearchCondition, Depends(search_condition)],
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=100)] = settings.DEFAULT_PAGE_SIZE,
) -> Page:
    """검색 결과를 페이지로 조회합니다. 가능하면 전체 개수 쿼리를 생략합니다."""
    return await member_service.search_page(
        db, condition, page, per_page, skip_count_when_possible=True
    )
