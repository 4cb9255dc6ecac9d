"""회원 레포지토리 — 필터, 조인, 서브쿼리, 프로젝션, 동적 쿼리, 벌크 연산.

Member Repository — Filtering, joins, subqueries, projections,
dynamic predicates and bulk DML against the members table.
Every method builds a SQLAlchemy statement and executes it through the
given AsyncSession; database errors propagate unchanged.
"""

from typing import Any, Sequence

from sqlalchemy import Row, Select, String, case, cast, delete, func, literal, select, text, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased, contains_eager

from querystudy.models import Member, Team
from querystudy.querying.conditions import (
    UNSET,
    PredicateBuilder,
    Unset,
    age_eq,
    age_goe,
    age_loe,
    all_eq,
    optional,
    team_name_eq,
    username_eq,
)
from querystudy.querying.projections import constructor, fields, from_rows
from querystudy.querying.spec import QuerySpec, apply, count_query, order_by, paginate, where
from querystudy.repositories.base import BaseRepository
from querystudy.schemas.member import MemberDto, MemberSearchCondition, MemberTeamDto, UserDto
from querystudy.utils.pagination import QueryResults, paginate as paginate_query, paginate_lazily


class MemberRepository(BaseRepository[Member]):
    """회원 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the members table.
    """

    def __init__(self) -> None:
        super().__init__(Member)

    # ------------------------------------------------------------------
    # 기본 조회 (Basic lookups)
    # ------------------------------------------------------------------

    async def find_by_username_text(self, db: AsyncSession, username: str) -> Member:
        """SQL 문자열로 회원을 조회합니다.

        Load a member from a raw SQL string mapped onto the Member entity.

        Raises:
            NoResultFound: 회원이 없을 때 (No matching member)
            MultipleResultsFound: 동일 이름 회원이 여럿일 때 (Several matching members)
        """
        statement = text(
            "SELECT id, username, age, team_id FROM members WHERE username = :username"
        ).bindparams(username=username)
        result = await db.execute(select(Member).from_statement(statement))
        return result.scalar_one()

    async def find_by_username(self, db: AsyncSession, username: str) -> Member | None:
        """이름으로 회원을 조회합니다. team은 로드하지 않습니다."""
        query: Select = select(Member).where(Member.username == username)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def search_between(
        self,
        db: AsyncSession,
        username: str,
        min_age: int,
        max_age: int,
    ) -> Member | None:
        """이름이 일치하고 나이가 범위(포함) 안에 있는 회원을 조회합니다."""
        query: Select = select(Member).where(
            (Member.username == username) & Member.age.between(min_age, max_age)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def search_and_params(self, db: AsyncSession, username: str, age: int) -> Member | None:
        """where 인자를 나열하면 AND로 결합됩니다."""
        query: Select = select(Member).where(Member.username == username, Member.age == age)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    # ------------------------------------------------------------------
    # 결과 조회 방식 (Result fetch styles)
    # ------------------------------------------------------------------

    async def fetch(self, db: AsyncSession, spec: QuerySpec | None = None) -> list[Member]:
        """쿼리 명세를 적용하여 회원 목록을 조회합니다."""
        query: Select = apply(spec or QuerySpec(), select(Member))
        result = await db.execute(query)
        return list(result.scalars().all())

    async def fetch_all(self, db: AsyncSession) -> list[Member]:
        """모든 회원을 ID 순으로 조회합니다."""
        return await self.fetch(db, order_by(QuerySpec(), Member.id))

    async def fetch_one(self, db: AsyncSession, spec: QuerySpec | None = None) -> Member | None:
        """결과가 하나인 쿼리를 실행합니다.

        Returns:
            Member | None: 결과가 없으면 None (None when nothing matches)

        Raises:
            MultipleResultsFound: 결과가 둘 이상일 때 (More than one row)
        """
        query: Select = apply(spec or QuerySpec(), select(Member))
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def fetch_first(self, db: AsyncSession, spec: QuerySpec | None = None) -> Member | None:
        """첫 번째 결과만 조회합니다 (LIMIT 1)."""
        spec = spec or order_by(QuerySpec(), Member.id)
        query: Select = apply(spec, select(Member)).limit(1)
        result = await db.execute(query)
        return result.scalars().first()

    async def fetch_count(self, db: AsyncSession, spec: QuerySpec | None = None) -> int:
        """명세의 조건에 맞는 전체 회원 수를 조회합니다."""
        query: Select = count_query(spec or QuerySpec(), select(Member))
        return (await db.execute(query)).scalar() or 0

    async def fetch_results(self, db: AsyncSession, spec: QuerySpec | None = None) -> QueryResults:
        """페이지 내용과 전체 개수를 함께 조회합니다.

        Fetch the bounded content and the unbounded total count in two queries.

        Returns:
            QueryResults: 결과, 전체 개수, limit, offset
        """
        spec = spec or QuerySpec()
        results: list[Member] = await self.fetch(db, spec)
        total: int = await self.fetch_count(db, spec)
        return QueryResults(
            results=results,
            total=total,
            limit=spec.limit,
            offset=spec.offset or 0,
        )

    # ------------------------------------------------------------------
    # 정렬 및 페이징 (Sorting and paging)
    # ------------------------------------------------------------------

    async def find_by_age_sorted(self, db: AsyncSession, age: int) -> list[Member]:
        """나이 내림차순, 이름 오름차순으로 정렬합니다. 이름이 NULL이면 마지막.

        Order by age descending then username ascending, NULL usernames last.
        """
        spec: QuerySpec = order_by(
            where(QuerySpec(), Member.age == age),
            Member.age.desc(),
            Member.username.asc().nulls_last(),
        )
        return await self.fetch(db, spec)

    def _page_spec(self, offset: int, limit: int) -> QuerySpec:
        return paginate(order_by(QuerySpec(), Member.username.desc()), offset, limit)

    async def find_page(self, db: AsyncSession, offset: int, limit: int) -> list[Member]:
        """이름 내림차순으로 offset/limit 페이지를 조회합니다."""
        return await self.fetch(db, self._page_spec(offset, limit))

    async def find_page_results(self, db: AsyncSession, offset: int, limit: int) -> QueryResults:
        """find_page 결과에 전체 개수를 포함하여 조회합니다."""
        return await self.fetch_results(db, self._page_spec(offset, limit))

    # ------------------------------------------------------------------
    # 집계 (Aggregation)
    # ------------------------------------------------------------------

    async def aggregate(self, db: AsyncSession) -> Row[Any]:
        """회원 수, 나이 합계/평균/최대/최소를 조회합니다.

        Returns:
            Row: member_count, age_sum, age_avg, age_max, age_min 라벨을 가진 단일 행
        """
        query: Select = select(
            func.count(Member.id).label("member_count"),
            func.sum(Member.age).label("age_sum"),
            func.avg(Member.age).label("age_avg"),
            func.max(Member.age).label("age_max"),
            func.min(Member.age).label("age_min"),
        )
        result = await db.execute(query)
        return result.one()

    # ------------------------------------------------------------------
    # 조인 (Joins)
    # ------------------------------------------------------------------

    async def find_by_team_name(self, db: AsyncSession, team_name: str) -> list[Member]:
        """연관관계 내부 조인으로 특정 팀의 회원을 조회합니다."""
        query: Select = (
            select(Member)
            .join(Member.team)
            .where(Team.name == team_name)
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_by_username_matching_team_name(self, db: AsyncSession) -> list[Member]:
        """세타 조인 — 연관관계 없이 회원 이름과 팀 이름이 같은 회원을 조회합니다.

        Theta join: members whose username equals some team name.
        """
        query: Select = (
            select(Member)
            .select_from(Member, Team)
            .where(Member.username == Team.name)
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_with_team_named(self, db: AsyncSession, team_name: str) -> Sequence[Row[Any]]:
        """회원은 모두 조회하고, 이름이 일치하는 팀만 외부 조인합니다.

        Left outer join on the association with the team name in the ON clause.
        Every member is returned; the team column is None unless it matches.

        Returns:
            Sequence[Row]: (Member, Team | None) 행 목록
        """
        query: Select = (
            select(Member, Team)
            .outerjoin(Member.team.and_(Team.name == team_name))
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return result.all()

    async def find_with_team_by_name_match(self, db: AsyncSession) -> Sequence[Row[Any]]:
        """연관관계 없는 외부 조인 — 회원 이름과 같은 이름의 팀을 붙입니다.

        Returns:
            Sequence[Row]: (Member, Team | None) 행 목록
        """
        query: Select = (
            select(Member, Team)
            .outerjoin(Team, Member.username == Team.name)
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return result.all()

    async def find_with_team_fetched(self, db: AsyncSession, username: str) -> Member | None:
        """페치 조인 — 같은 쿼리에서 팀까지 로드합니다.

        Fetch join: the inner join also populates Member.team.
        """
        query: Select = (
            select(Member)
            .join(Member.team)
            .options(contains_eager(Member.team))
            .where(Member.username == username)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    # ------------------------------------------------------------------
    # 서브쿼리 (Subqueries)
    # ------------------------------------------------------------------

    async def find_oldest(self, db: AsyncSession) -> list[Member]:
        """나이가 가장 많은 회원을 조회합니다."""
        member_sub = aliased(Member, name="member_sub")
        query: Select = (
            select(Member)
            .where(Member.age == select(func.max(member_sub.age)).scalar_subquery())
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_age_at_least_average(self, db: AsyncSession) -> list[Member]:
        """나이가 평균 이상인 회원을 조회합니다."""
        member_sub = aliased(Member, name="member_sub")
        query: Select = (
            select(Member)
            .where(Member.age >= select(func.avg(member_sub.age)).scalar_subquery())
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_age_in_older_than(self, db: AsyncSession, age: int) -> list[Member]:
        """IN 서브쿼리 — 나이가 기준보다 많은 회원을 조회합니다."""
        member_sub = aliased(Member, name="member_sub")
        query: Select = (
            select(Member)
            .where(Member.age.in_(select(member_sub.age).where(member_sub.age > age)))
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_usernames_with_average_age(self, db: AsyncSession) -> Sequence[Row[Any]]:
        """select 절 서브쿼리 — 회원 이름과 전체 평균 나이를 함께 조회합니다.

        Returns:
            Sequence[Row]: (username, average_age) 행 목록
        """
        member_sub = aliased(Member, name="member_sub")
        query: Select = select(
            Member.username,
            select(func.avg(member_sub.age)).scalar_subquery().label("average_age"),
        ).order_by(Member.id)
        result = await db.execute(query)
        return result.all()

    # ------------------------------------------------------------------
    # CASE, 상수, 문자열 (CASE, constants, strings)
    # ------------------------------------------------------------------

    async def age_labels(self, db: AsyncSession) -> list[str]:
        """단순 CASE — 나이 값별 라벨을 조회합니다."""
        label = case({10: "열살", 20: "스무살"}, value=Member.age, else_="기타")
        result = await db.execute(select(label).order_by(Member.id))
        return list(result.scalars().all())

    async def age_range_labels(self, db: AsyncSession) -> list[str]:
        """검색 CASE — 나이 구간별 라벨을 조회합니다."""
        label = case(
            (Member.age.between(0, 20), "0~20살"),
            (Member.age.between(21, 30), "21~30살"),
            else_="기타",
        )
        result = await db.execute(select(label).order_by(Member.id))
        return list(result.scalars().all())

    async def usernames_with_constant(self, db: AsyncSession, constant: str) -> Sequence[Row[Any]]:
        """회원 이름과 상수 컬럼을 함께 조회합니다.

        Returns:
            Sequence[Row]: (username, constant) 행 목록
        """
        query: Select = select(
            Member.username,
            literal(constant, String, literal_execute=True).label("constant"),
        ).order_by(Member.id)
        result = await db.execute(query)
        return result.all()

    async def username_age_concat(self, db: AsyncSession, username: str) -> list[str]:
        """이름과 나이를 '_'로 이어 붙입니다. 나이는 문자열로 변환합니다."""
        concatenated = Member.username + "_" + cast(Member.age, String)
        query: Select = select(concatenated).where(Member.username == username)
        result = await db.execute(query)
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # 프로젝션 (Projections)
    # ------------------------------------------------------------------

    async def usernames(self, db: AsyncSession) -> list[str | None]:
        """단일 컬럼 프로젝션."""
        result = await db.execute(select(Member.username).order_by(Member.id))
        return list(result.scalars().all())

    async def username_age_tuples(self, db: AsyncSession) -> Sequence[Row[Any]]:
        """튜플 프로젝션 — (username, age) 행 목록."""
        result = await db.execute(select(Member.username, Member.age).order_by(Member.id))
        return result.all()

    async def find_member_dtos_text(self, db: AsyncSession) -> list[MemberDto]:
        """SQL 문자열 결과를 MemberDto로 변환합니다."""
        result = await db.execute(text("SELECT username, age FROM members ORDER BY id"))
        return from_rows(MemberDto, result.all())

    async def find_member_dtos_by_attributes(self, db: AsyncSession) -> list[MemberDto]:
        """조회한 행을 속성 단위로 읽어 MemberDto로 변환합니다."""
        result = await db.execute(select(Member.username, Member.age).order_by(Member.id))
        return from_rows(MemberDto, result.all())

    async def find_member_dtos_by_fields(self, db: AsyncSession) -> list[MemberDto]:
        """컬럼 라벨과 필드 이름을 맞춰 MemberDto로 변환합니다."""
        projection = fields(MemberDto, Member.username, Member.age)
        result = await db.execute(select(projection).order_by(Member.id))
        return list(result.scalars().all())

    async def find_member_dtos_by_constructor(self, db: AsyncSession) -> list[MemberDto]:
        """컬럼 순서대로 MemberDto를 생성합니다."""
        projection = constructor(MemberDto, Member.username, Member.age)
        result = await db.execute(select(projection).order_by(Member.id))
        return list(result.scalars().all())

    async def find_user_dtos_by_fields(self, db: AsyncSession) -> list[UserDto]:
        """username 컬럼에 "name" 라벨을 붙여 UserDto로 변환합니다."""
        projection = fields(UserDto, Member.username.label("name"), Member.age)
        result = await db.execute(select(projection).order_by(Member.id))
        return list(result.scalars().all())

    async def find_user_dtos_with_max_age(self, db: AsyncSession) -> list[UserDto]:
        """서브쿼리 결과에 "age" 라벨을 붙여 모든 UserDto에 최대 나이를 채웁니다."""
        member_sub = aliased(Member, name="member_sub")
        projection = fields(
            UserDto,
            Member.username.label("name"),
            select(func.max(member_sub.age)).scalar_subquery().label("age"),
        )
        result = await db.execute(select(projection).order_by(Member.id))
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # 동적 쿼리 (Dynamic queries)
    # ------------------------------------------------------------------

    async def search_member_builder(
        self,
        db: AsyncSession,
        username: str | None | Unset = UNSET,
        age: int | None | Unset = UNSET,
    ) -> list[Member]:
        """PredicateBuilder로 주어진 조건만 누적하여 조회합니다."""
        builder: PredicateBuilder = PredicateBuilder()
        if username is not UNSET:
            builder.and_(username_eq(username))
        if age is not UNSET:
            builder.and_(age_eq(age))

        return await self.fetch(db, order_by(where(QuerySpec(), builder.value), Member.id))

    async def search_member_where_params(
        self,
        db: AsyncSession,
        username: str | None | Unset = UNSET,
        age: int | None | Unset = UNSET,
    ) -> list[Member]:
        """조합된 조건 all_eq로 조회합니다. 모든 입력이 UNSET이면 전체 조회."""
        return await self.fetch(db, order_by(where(QuerySpec(), all_eq(username, age)), Member.id))

    # ------------------------------------------------------------------
    # 벌크 연산 (Bulk DML)
    # ------------------------------------------------------------------

    async def bulk_rename_younger_than(self, db: AsyncSession, age: int, username: str) -> int:
        """나이가 기준 미만인 회원의 이름을 일괄 변경합니다.

        Returns:
            int: 변경된 행 수 (Number of updated rows)
        """
        result = await db.execute(
            update(Member).where(Member.age < age).values(username=username)
        )
        return result.rowcount

    async def bulk_multiply_age(self, db: AsyncSession, factor: int) -> int:
        """모든 회원의 나이에 factor를 곱합니다."""
        result = await db.execute(update(Member).values(age=Member.age * factor))
        return result.rowcount

    async def bulk_delete_older_than(self, db: AsyncSession, age: int) -> int:
        """나이가 기준 초과인 회원을 일괄 삭제합니다."""
        result = await db.execute(delete(Member).where(Member.age > age))
        return result.rowcount

    # ------------------------------------------------------------------
    # 회원 검색 (Member search)
    # ------------------------------------------------------------------

    def _search_spec(self, condition: MemberSearchCondition) -> QuerySpec:
        spec: QuerySpec = where(
            QuerySpec(),
            username_eq(optional(condition.username)),
            team_name_eq(optional(condition.team_name)),
            age_goe(optional(condition.age_goe)),
            age_loe(optional(condition.age_loe)),
        )
        return order_by(spec, Member.id)

    def _search_query(self, condition: MemberSearchCondition) -> Select:
        base: Select = select(MemberTeamDto.bundle()).select_from(Member).outerjoin(Member.team)
        return apply(self._search_spec(condition), base)

    async def search(self, db: AsyncSession, condition: MemberSearchCondition) -> list[MemberTeamDto]:
        """검색 조건으로 회원-팀 프로젝션을 조회합니다.

        Search members with their team; absent condition fields are ignored.
        Members without a team are included unless a team name is given.
        """
        result = await db.execute(self._search_query(condition))
        return list(result.scalars().all())

    async def search_page_simple(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[MemberTeamDto], int]:
        """검색 결과 페이지와 전체 개수를 항상 두 쿼리로 조회합니다."""
        return await paginate_query(db, self._search_query(condition), page, per_page)

    async def search_page_complex(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[MemberTeamDto], int]:
        """페이지 내용으로 전체 개수가 확정되면 개수 쿼리를 생략합니다."""
        return await paginate_lazily(db, self._search_query(condition), page, per_page)


# 싱글턴 인스턴스 — Singleton instance
member_repository: MemberRepository = MemberRepository()
