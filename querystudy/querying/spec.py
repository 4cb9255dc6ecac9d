"""불변 쿼리 명세 모듈.

Immutable query specification.
A QuerySpec lists filters, sort keys and pagination bounds. It is built up
by pure functions that return new values and applied once to a base SELECT
at the execution boundary (MemberRepository.fetch / fetch_results).

Usage:
    spec = paginate(order_by(where(QuerySpec(), age_goe(20)), Member.age.desc()), 0, 10)
    members = await member_repository.fetch(db, spec)
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from sqlalchemy import Select, func, select


class QuerySpec(BaseModel):
    """쿼리 명세 값 객체.

    Attributes:
        filters: AND로 결합될 조건 목록 (Predicates joined with AND)
        order_by: 정렬 기준 목록 (Sort keys in priority order)
        offset: 건너뛸 행 수, None이면 미적용 (Rows to skip)
        limit: 최대 행 수, None이면 미적용 (Maximum rows)
    """

    model_config = ConfigDict(frozen=True)

    filters: tuple[Any, ...] = ()
    order_by: tuple[Any, ...] = ()
    offset: int | None = None
    limit: int | None = None


def where(spec: QuerySpec, *predicates: Any) -> QuerySpec:
    """조건을 추가한 새 명세를 반환합니다. None 조건은 무시됩니다."""
    kept: tuple[Any, ...] = tuple(p for p in predicates if p is not None)
    return spec.model_copy(update={"filters": spec.filters + kept})


def order_by(spec: QuerySpec, *keys: Any) -> QuerySpec:
    """정렬 기준을 추가한 새 명세를 반환합니다."""
    return spec.model_copy(update={"order_by": spec.order_by + keys})


def paginate(spec: QuerySpec, offset: int, limit: int) -> QuerySpec:
    """페이지 범위를 설정한 새 명세를 반환합니다.

    Raises:
        ValueError: offset 또는 limit이 음수일 때 (Negative offset or limit)
    """
    if offset < 0 or limit < 0:
        raise ValueError(f"offset and limit must be non-negative, got offset={offset}, limit={limit}")
    return spec.model_copy(update={"offset": offset, "limit": limit})


def apply(spec: QuerySpec, query: Select) -> Select:
    """명세를 SELECT 쿼리에 적용합니다.

    Apply filters, ordering and bounds to a base SELECT.
    """
    if spec.filters:
        query = query.where(*spec.filters)
    if spec.order_by:
        query = query.order_by(*spec.order_by)
    if spec.offset is not None:
        query = query.offset(spec.offset)
    if spec.limit is not None:
        query = query.limit(spec.limit)
    return query


def count_query(spec: QuerySpec, query: Select) -> Select:
    """정렬/페이지를 제외한 전체 개수 쿼리를 생성합니다.

    Build the total-count query for a spec, ignoring ordering and bounds.
    """
    filtered: Select = query.where(*spec.filters) if spec.filters else query
    return select(func.count()).select_from(filtered.subquery())
