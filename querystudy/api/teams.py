"""팀 라우터 — 팀별 통계 및 팀 상세 엔드포인트."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from querystudy.database import get_db
from querystudy.schemas.member import TeamDetailResponse, TeamStatsResponse
from querystudy.services.member_service import member_service

router: APIRouter = APIRouter()


@router.get("/v1/teams/stats", response_model=list[TeamStatsResponse])
async def team_stats(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[TeamStatsResponse]:
    """팀 이름순으로 팀별 평균 나이와 회원 수를 조회합니다."""
    return await member_service.team_stats(db)


@router.get("/v1/teams/{team_id}", response_model=TeamDetailResponse)
async def get_team(
    team_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TeamDetailResponse:
    """팀과 소속 회원 목록을 조회합니다. 없으면 404."""
    return await member_service.team_detail(db, team_id)
