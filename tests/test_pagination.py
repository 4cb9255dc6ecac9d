"""페이지네이션 유틸리티 테스트 — 전체 개수 쿼리 생략 조건.

Pagination utility tests — when the count query is skipped.
"""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from querystudy.models import Member
from querystudy.utils import pagination
from querystudy.utils.pagination import Page, paginate, paginate_lazily

QUERY = select(Member).order_by(Member.id)


class TestPage:
    """Page 모델 테스트."""

    @pytest.mark.parametrize("total, per_page, pages", [(0, 20, 0), (4, 2, 2), (5, 2, 3)])
    def test_pages_computed(self, total, per_page, pages):
        assert Page.of([], total, 1, per_page).pages == pages


class TestPaginate:
    """paginate 테스트."""

    async def test_paginate(self, db: AsyncSession, members):
        items, total = await paginate(db, QUERY, page=2, per_page=3)
        assert [m.username for m in items] == ["member4"]
        assert total == 4


class TestPaginateLazily:
    """paginate_lazily 테스트."""

    async def test_short_first_page_skips_count(self, db: AsyncSession, members):
        with patch.object(pagination, "count", new=AsyncMock(return_value=-1)) as count:
            items, total = await paginate_lazily(db, QUERY, page=1, per_page=10)
        assert total == 4
        assert len(items) == 4
        count.assert_not_awaited()

    async def test_partial_last_page_skips_count(self, db: AsyncSession, members):
        with patch.object(pagination, "count", new=AsyncMock(return_value=-1)) as count:
            items, total = await paginate_lazily(db, QUERY, page=2, per_page=3)
        assert total == 4
        assert [m.username for m in items] == ["member4"]
        count.assert_not_awaited()

    async def test_full_page_runs_count(self, db: AsyncSession, members):
        items, total = await paginate_lazily(db, QUERY, page=1, per_page=2)
        assert total == 4
        assert len(items) == 2

    async def test_page_past_end_runs_count(self, db: AsyncSession, members):
        items, total = await paginate_lazily(db, QUERY, page=5, per_page=2)
        assert items == []
        assert total == 4
