"""Axiom 요청 로깅 미들웨어 테스트.

Request logging middleware tests with a recording client in place of Axiom.
"""

from collections.abc import AsyncGenerator
from typing import Any

import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from querystudy.api import api_router
from querystudy.database import get_db
from querystudy.middleware.axiom_logging import AxiomLoggingMiddleware


class RecordingClient:
    """ingest_events 호출을 기록하는 Axiom 클라이언트 대역."""

    def __init__(self, fail: bool = False) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []
        self.fail = fail

    def ingest_events(self, dataset: str, events: list[dict[str, Any]]) -> None:
        if self.fail:
            raise RuntimeError("axiom unavailable")
        self.events.extend((dataset, event) for event in events)


def build_app(db: AsyncSession, recorder: RecordingClient) -> FastAPI:
    logged_app = FastAPI()
    logged_app.add_middleware(AxiomLoggingMiddleware, client=recorder, dataset="api-logs")

    @logged_app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    logged_app.include_router(api_router, prefix="/api")
    logged_app.dependency_overrides[get_db] = _override_get_db
    return logged_app


@pytest_asyncio.fixture
async def recorder() -> RecordingClient:
    return RecordingClient()


@pytest_asyncio.fixture
async def logged_client(db: AsyncSession, recorder: RecordingClient) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=build_app(db, recorder))
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestAxiomLogging:
    """요청 로깅 테스트."""

    async def test_success_logged(self, logged_client: AsyncClient, recorder: RecordingClient, members):
        res = await logged_client.get("/api/v1/members", params={"team_name": "teamA"})
        assert res.status_code == 200

        assert len(recorder.events) == 1
        dataset, event = recorder.events[0]
        assert dataset == "api-logs"
        assert event["method"] == "GET"
        assert event["path"] == "/api/v1/members"
        assert event["status_code"] == 200
        assert event["query_params"] == {"team_name": "teamA"}
        assert event["duration_ms"] >= 0
        assert "error" not in event

    async def test_error_detail_logged(self, logged_client: AsyncClient, recorder: RecordingClient, members):
        res = await logged_client.get("/api/v1/members", params={"age_goe": 30, "age_loe": 20})
        assert res.status_code == 400
        assert res.json() == {"detail": "age_goe must not exceed age_loe"}

        _, event = recorder.events[0]
        assert event["status_code"] == 400
        assert event["error"] == "age_goe must not exceed age_loe"

    async def test_health_not_logged(self, logged_client: AsyncClient, recorder: RecordingClient):
        res = await logged_client.get("/health")
        assert res.status_code == 200
        assert recorder.events == []

    async def test_ingest_failure_does_not_break_request(self, db: AsyncSession, members):
        transport = ASGITransport(app=build_app(db, RecordingClient(fail=True)))
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            res = await ac.get("/api/v1/members")
        assert res.status_code == 200
        assert len(res.json()) == 4
