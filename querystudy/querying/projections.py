"""DTO 프로젝션 모듈 — 조회 컬럼을 Pydantic DTO로 변환.

DTO projections built on SQLAlchemy's Bundle.
A bundle groups several column expressions under one SELECT entity and
shapes each result row into a DTO instance:

    fields(MemberDto, Member.username, Member.age)
        matches columns to DTO fields by label; unmatched fields keep
        their defaults, so label with .label("name") when names differ.
    constructor(MemberDto, Member.username, Member.age)
        assigns columns to DTO fields by position.

from_rows() covers the attribute style: rows are fetched first and each
one is read attribute by attribute into the DTO.
"""

from collections.abc import Iterable
from typing import Any, Callable, Sequence, TypeVar

from pydantic import BaseModel
from sqlalchemy.orm import Bundle

DtoType = TypeVar("DtoType", bound=BaseModel)


class DtoBundle(Bundle):
    """행을 DTO 인스턴스로 변환하는 번들.

    Bundle whose row processor builds a pydantic model per row.

    Attributes:
        dto: 생성할 DTO 클래스 (DTO class to build)
        positional: True면 위치 기반, False면 라벨 기반
                    (Assign by position when True, by label otherwise)
    """

    def __init__(self, dto: type[BaseModel], *exprs: Any, positional: bool = False) -> None:
        # 번들 이름은 컴파일 캐시 키에 포함되므로 DTO 클래스와 변환 방식을 구분해야 함
        # (The name is part of the compiled cache key, so it must identify the DTO class and mode)
        mode: str = "constructor" if positional else "fields"
        name: str = f"{dto.__module__}.{dto.__qualname__}_{mode}"
        super().__init__(name, *exprs, single_entity=True)
        self.dto: type[BaseModel] = dto
        self.positional: bool = positional

    def create_row_processor(
        self,
        query: Any,
        procs: Sequence[Callable[[Any], Any]],
        labels: Sequence[str],
    ) -> Callable[[Any], BaseModel]:
        dto: type[BaseModel] = self.dto
        keys: list[str] = list(dto.model_fields) if self.positional else list(labels)

        def proc(row: Any) -> BaseModel:
            return dto(**{key: getter(row) for key, getter in zip(keys, procs)})

        return proc


def fields(dto: type[DtoType], *exprs: Any) -> DtoBundle:
    """라벨 이름으로 DTO 필드를 채우는 프로젝션."""
    return DtoBundle(dto, *exprs)


def constructor(dto: type[DtoType], *exprs: Any) -> DtoBundle:
    """컬럼 순서대로 DTO 필드를 채우는 프로젝션.

    Raises:
        ValueError: 컬럼 수가 DTO 필드 수보다 많을 때 (More columns than DTO fields)
    """
    if len(exprs) > len(dto.model_fields):
        raise ValueError(f"{dto.__name__} has {len(dto.model_fields)} fields, got {len(exprs)} columns")
    return DtoBundle(dto, *exprs, positional=True)


def from_rows(dto: type[DtoType], rows: Iterable[Any]) -> list[DtoType]:
    """조회된 행을 속성 단위로 읽어 DTO 목록으로 변환합니다."""
    return [dto.model_validate(row, from_attributes=True) for row in rows]
