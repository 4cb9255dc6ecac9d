"""표현식 테스트 — CASE, 상수, 문자열 결합."""

from sqlalchemy.ext.asyncio import AsyncSession

from querystudy.repositories.member_repository import member_repository


class TestCase:
    """CASE 식 테스트."""

    async def test_basic_case(self, db: AsyncSession, members):
        labels = await member_repository.age_labels(db)
        assert labels == ["열살", "스무살", "기타", "기타"]

    async def test_complex_case(self, db: AsyncSession, members):
        labels = await member_repository.age_range_labels(db)
        assert labels == ["0~20살", "0~20살", "21~30살", "기타"]


class TestConstantsAndConcat:
    """상수 및 문자열 결합 테스트."""

    async def test_constant_column(self, db: AsyncSession, members):
        rows = await member_repository.usernames_with_constant(db, "A")
        assert [(r.username, r.constant) for r in rows] == [
            ("member1", "A"),
            ("member2", "A"),
            ("member3", "A"),
            ("member4", "A"),
        ]

    async def test_concat_with_age_as_string(self, db: AsyncSession, members):
        """나이는 숫자이므로 문자열로 변환한 뒤 결합."""
        result = await member_repository.username_age_concat(db, "member1")
        assert result == ["member1_10"]
