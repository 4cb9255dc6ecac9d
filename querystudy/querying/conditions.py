"""동적 조건 조합 모듈 — 선택적 필터를 하나의 AND 조건으로 결합.

Dynamic predicate composition.
Builds optional filter predicates and combines the ones that are present
into a single conjunction, so one query path serves every combination of
optional filters.

Absence is the explicit UNSET sentinel. None is a present value and
matches NULL, which keeps "not filtering" and "filtering for NULL" apart.

Both composition styles (PredicateBuilder and all_of) skip None operands,
and an empty conjunction is None, meaning "no filtering".
"""

from typing import Any, TypeVar

from sqlalchemy import ColumnElement, and_

from querystudy.models import Member, Team

T = TypeVar("T")

Predicate = ColumnElement[bool]


class Unset:
    """값이 주어지지 않았음을 나타내는 센티널 타입."""

    _instance: "Unset | None" = None

    def __new__(cls) -> "Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Unset = Unset()


def optional(value: T | None) -> T | Unset:
    """None을 UNSET으로 변환합니다.

    Map None to UNSET for inputs where null means "not given",
    such as HTTP query parameters.
    """
    return UNSET if value is None else value


def _eq(column: Any, value: Any) -> Predicate | None:
    if value is UNSET:
        return None
    if value is None:
        return column.is_(None)
    return column == value


def username_eq(username: str | None | Unset = UNSET) -> Predicate | None:
    """회원 이름 일치 조건. UNSET이면 None."""
    return _eq(Member.username, username)


def age_eq(age: int | None | Unset = UNSET) -> Predicate | None:
    """회원 나이 일치 조건. UNSET이면 None."""
    return _eq(Member.age, age)


def team_name_eq(team_name: str | None | Unset = UNSET) -> Predicate | None:
    """팀 이름 일치 조건. UNSET이면 None."""
    return _eq(Team.name, team_name)


def age_goe(age: int | Unset = UNSET) -> Predicate | None:
    """최소 나이 조건 (age >= value). UNSET이면 None."""
    return None if age is UNSET else Member.age >= age


def age_loe(age: int | Unset = UNSET) -> Predicate | None:
    """최대 나이 조건 (age <= value). UNSET이면 None."""
    return None if age is UNSET else Member.age <= age


def all_of(*predicates: Predicate | None) -> Predicate | None:
    """None이 아닌 조건들을 AND로 결합합니다.

    Combine the non-None predicates with AND.

    Args:
        *predicates: 결합할 조건, None은 무시 (Predicates to combine; None is skipped)

    Returns:
        Predicate | None: 결합된 조건, 모두 None이면 None
                          (Conjunction, or None when every operand is None)
    """
    present: list[Predicate] = [p for p in predicates if p is not None]
    if not present:
        return None
    if len(present) == 1:
        return present[0]
    return and_(*present)


def all_eq(
    username: str | None | Unset = UNSET,
    age: int | None | Unset = UNSET,
) -> Predicate | None:
    """이름/나이 조건을 조합합니다.

    Compose username and age equality; absent inputs are omitted.
    """
    return all_of(username_eq(username), age_eq(age))


class PredicateBuilder:
    """조건을 누적하는 빌더.

    Mutable accumulator of predicates. Starts empty, and `and_` ignores None,
    so callers can append conditionally without guarding every call.
    """

    def __init__(self, *initial: Predicate | None) -> None:
        self._predicates: list[Predicate] = [p for p in initial if p is not None]

    def and_(self, predicate: Predicate | None) -> "PredicateBuilder":
        if predicate is not None:
            self._predicates.append(predicate)
        return self

    def has_value(self) -> bool:
        return bool(self._predicates)

    @property
    def value(self) -> Predicate | None:
        """누적된 조건의 AND 결합, 비어 있으면 None."""
        return all_of(*self._predicates)
