"""API 라우터 패키지 — 모든 엔드포인트 통합.

API Router package — Aggregates the member and team routers
into a single router for inclusion in the FastAPI application.

Included routers:
    - members: 회원 검색 (Member search, list and paged)
    - teams: 팀 통계 (Team statistics)
"""

from fastapi import APIRouter

from querystudy.api.members import router as members_router
from querystudy.api.teams import router as teams_router

api_router: APIRouter = APIRouter()
api_router.include_router(members_router, tags=["Members"])
api_router.include_router(teams_router, tags=["Teams"])
