"""페이지네이션 유틸리티 모듈.

Pagination utility module for SQLAlchemy async queries.
Provides the paginate helper, the Page response model and the
QueryResults container (page content plus total count and bounds).
"""

import math
from typing import Any, Sequence

from pydantic import BaseModel
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession


class Page(BaseModel):
    """페이지네이션 결과 모델.

    Attributes:
        items: 현재 페이지 항목 목록 (Items for the current page)
        total: 전체 항목 수 (Total count across all pages)
        page: 현재 페이지 번호 (Current page number, 1-based)
        per_page: 페이지당 항목 수 (Items per page)
        pages: 전체 페이지 수 (Total number of pages)
    """

    items: list[Any]
    total: int
    page: int
    per_page: int
    pages: int

    @classmethod
    def of(cls, items: Sequence[Any], total: int, page: int, per_page: int) -> "Page":
        """전체 페이지 수를 계산하여 Page를 생성합니다."""
        pages: int = math.ceil(total / per_page) if per_page else 0
        return cls(items=list(items), total=total, page=page, per_page=per_page, pages=pages)


class QueryResults(BaseModel):
    """조회 결과와 전체 개수를 함께 담는 모델.

    Page content plus the total row count and the bounds that produced it.

    Attributes:
        results: 조회된 항목 (Fetched rows for the requested bounds)
        total: 범위를 무시한 전체 개수 (Total count ignoring offset/limit)
        limit: 적용된 limit, 없으면 None (Applied limit)
        offset: 적용된 offset (Applied offset)
    """

    results: list[Any]
    total: int
    limit: int | None = None
    offset: int = 0


async def count(db: AsyncSession, query: Select[Any]) -> int:
    """쿼리 결과의 전체 개수를 조회합니다.

    Count the rows of a query by wrapping it in a subquery.
    Ordering and bounds are stripped first.
    """
    base: Select[Any] = query.order_by(None).limit(None).offset(None)
    count_query = select(func.count()).select_from(base.subquery())
    return (await db.execute(count_query)).scalar() or 0


async def paginate(
    db: AsyncSession,
    query: Select[Any],
    page: int = 1,
    per_page: int = 20,
) -> tuple[Sequence[Any], int]:
    """SQLAlchemy 쿼리에 대한 페이지네이션을 수행합니다.

    Execute a paginated SQLAlchemy query, returning items and total count.
    Runs two queries: one for the total count (via subquery) and one for
    the actual page of results with OFFSET/LIMIT.

    Args:
        db: 비동기 DB 세션 (Async database session)
        query: SQLAlchemy Select 쿼리 (Base query to paginate)
        page: 요청 페이지 번호, 1부터 시작 (Page number, 1-indexed, default: 1)
        per_page: 페이지당 항목 수 (Items per page, default: 20)

    Returns:
        tuple[Sequence[Any], int]: (항목 목록, 전체 개수) 튜플
    """
    total: int = await count(db, query)

    offset: int = (page - 1) * per_page
    result = await db.execute(query.offset(offset).limit(per_page))
    items: Sequence[Any] = result.scalars().all()

    return items, total


async def paginate_lazily(
    db: AsyncSession,
    query: Select[Any],
    page: int = 1,
    per_page: int = 20,
) -> tuple[Sequence[Any], int]:
    """전체 개수 쿼리를 가능한 경우 생략하는 페이지네이션.

    Paginate, skipping the count query when the fetched page already proves
    the total: a first page shorter than per_page, or any non-empty last page.
    """
    offset: int = (page - 1) * per_page
    result = await db.execute(query.offset(offset).limit(per_page))
    items: Sequence[Any] = result.scalars().all()

    if offset == 0 and len(items) < per_page:
        return items, len(items)
    if 0 < len(items) < per_page:
        return items, offset + len(items)

    return items, await count(db, query)
