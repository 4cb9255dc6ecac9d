"""동적 조건 조합 테스트.

Predicate composition tests — UNSET handling, None-skipping conjunction
and PredicateBuilder. No database is needed; predicates are compiled to SQL.
"""

from querystudy.querying.conditions import (
    UNSET,
    PredicateBuilder,
    Unset,
    age_eq,
    age_goe,
    age_loe,
    all_eq,
    all_of,
    optional,
    team_name_eq,
    username_eq,
)


def sql(predicate) -> str:
    return str(predicate.compile(compile_kwargs={"literal_binds": True}))


class TestUnset:
    """UNSET 센티널 테스트."""

    def test_singleton(self):
        assert Unset() is UNSET

    def test_falsy(self):
        assert not UNSET
        assert repr(UNSET) == "UNSET"

    def test_optional_maps_none_only(self):
        """None만 UNSET으로 변환되고 0, 빈 문자열은 유지."""
        assert optional(None) is UNSET
        assert optional(0) == 0
        assert optional("") == ""


class TestSingleFieldConditions:
    """단일 필드 조건 테스트."""

    def test_absent_returns_none(self):
        assert username_eq() is None
        assert age_eq(UNSET) is None
        assert team_name_eq(UNSET) is None
        assert age_goe(UNSET) is None
        assert age_loe(UNSET) is None

    def test_present_value_is_equality(self):
        assert sql(username_eq("member1")) == "members.username = 'member1'"
        assert sql(age_eq(10)) == "members.age = 10"
        assert sql(team_name_eq("teamA")) == "teams.name = 'teamA'"

    def test_present_none_is_null_check(self):
        assert sql(username_eq(None)) == "members.username IS NULL"

    def test_zero_age_is_present(self):
        assert sql(age_eq(0)) == "members.age = 0"

    def test_range_bounds(self):
        assert sql(age_goe(20)) == "members.age >= 20"
        assert sql(age_loe(30)) == "members.age <= 30"


class TestAllEq:
    """조합 조건 all_eq 테스트."""

    def test_both_absent_is_no_predicate(self):
        assert all_eq() is None
        assert all_eq(UNSET, UNSET) is None

    def test_only_username(self):
        assert sql(all_eq("member1")) == sql(username_eq("member1"))

    def test_only_age(self):
        assert sql(all_eq(age=10)) == sql(age_eq(10))

    def test_both_present(self):
        assert sql(all_eq("member1", 10)) == "members.username = 'member1' AND members.age = 10"


class TestAllOf:
    """None을 건너뛰는 AND 결합 테스트."""

    def test_all_none(self):
        assert all_of() is None
        assert all_of(None, None) is None

    def test_none_between_predicates_is_skipped(self):
        combined = all_of(username_eq("a"), None, age_eq(1))
        assert sql(combined) == "members.username = 'a' AND members.age = 1"


class TestPredicateBuilder:
    """PredicateBuilder 테스트."""

    def test_empty_builder(self):
        builder = PredicateBuilder()
        assert builder.value is None
        assert not builder.has_value()

    def test_and_skips_none(self):
        builder = PredicateBuilder().and_(None).and_(age_eq(10)).and_(age_eq(UNSET))
        assert builder.has_value()
        assert sql(builder.value) == "members.age = 10"

    def test_initial_predicates(self):
        builder = PredicateBuilder(username_eq("member1"), None)
        builder.and_(age_eq(10))
        assert sql(builder.value) == sql(all_eq("member1", 10))
