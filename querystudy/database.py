"""데이터베이스 엔진 및 세션 설정 모듈.

Database engine and session configuration module.
Sets up the async SQLAlchemy engine, session factory, and ORM base class.
PostgreSQL is reached through asyncpg; SQLite URLs use aiosqlite.
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, AsyncEngine, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from querystudy.config import settings


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """연결 URL에 맞는 비동기 엔진을 생성합니다.

    Create an async engine configured for the given backend.
    In-memory SQLite shares a single connection through StaticPool so that
    every session sees the same database.

    Args:
        database_url: SQLAlchemy 비동기 연결 URL (Async connection URL)
        echo: SQL 로그 출력 여부 (Whether to echo emitted SQL)

    Returns:
        AsyncEngine: 생성된 엔진 (Configured async engine)
    """
    kwargs: dict[str, Any] = {"echo": echo}

    if database_url.startswith("sqlite"):
        if ":memory:" in database_url:
            kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        # pool_pre_ping=True: 풀에서 꺼낸 연결의 유효성 사전 확인 (Validates connections before use)
        kwargs.update(pool_pre_ping=True, pool_size=5, max_overflow=10)

    return create_async_engine(database_url, **kwargs)


# 비동기 데이터베이스 엔진 (Async database engine)
engine: AsyncEngine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

# 비동기 세션 팩토리 (Async session factory)
# expire_on_commit=False: 커밋 후에도 객체 속성 접근 가능 (Allows attribute access after commit)
async_session: async_sessionmaker[AsyncSession] = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """SQLAlchemy 선언적 베이스 클래스.

    Declarative base class for all ORM models.
    """

    pass


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """비동기 데이터베이스 세션을 생성하고 요청 종료 시 닫습니다.

    FastAPI dependency that yields an async database session.

    Yields:
        AsyncSession: SQLAlchemy 비동기 세션 인스턴스 (Async session instance)
    """
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()
