"""회원 조회 결과 Pydantic 스키마 정의.

Member projection and search schema definitions.
Flat data-transfer shapes populated by query projections; they carry
no behavior beyond field storage.
"""

from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Bundle

from querystudy.models import Member, Team
from querystudy.querying.projections import constructor


class MemberDto(BaseModel):
    """회원 이름/나이 프로젝션.

    Member projection with username and age.
    Field names match the Member columns, so name-based projections fill both.
    """

    model_config = ConfigDict(from_attributes=True)

    username: str | None = None
    age: int | None = None


class UserDto(BaseModel):
    """사용자 이름/나이 프로젝션.

    Projection whose `name` field does not match any Member column.
    Name-based projections leave it None unless the column is labelled "name".
    """

    model_config = ConfigDict(from_attributes=True)

    name: str | None = None
    age: int | None = None


class MemberTeamDto(BaseModel):
    """회원-팀 조인 프로젝션 — 검색 API 응답 항목.

    Member and team join projection used as the search response item.

    Attributes:
        member_id: 회원 ID (Member identifier)
        username: 회원 이름 (Member name, nullable)
        age: 나이 (Member age)
        team_id: 팀 ID (Team identifier, null when the member has no team)
        team_name: 팀 이름 (Team name, null when the member has no team)
    """

    member_id: int
    username: str | None
    age: int
    team_id: int | None
    team_name: str | None

    @classmethod
    def bundle(cls) -> Bundle:
        """Member/Team 컬럼을 이 DTO로 변환하는 프로젝션 번들을 반환합니다.

        Return a constructor projection of Member and Team columns into this DTO.
        """
        return constructor(cls, Member.id, Member.username, Member.age, Team.id, Team.name)


class MemberSearchCondition(BaseModel):
    """회원 검색 조건 — 모든 필드는 선택 사항.

    Member search condition; every field is optional and None means "not given".

    Attributes:
        username: 회원 이름 일치 (Exact username)
        team_name: 팀 이름 일치 (Exact team name)
        age_goe: 최소 나이, 포함 (Minimum age, inclusive)
        age_loe: 최대 나이, 포함 (Maximum age, inclusive)
    """

    username: str | None = None
    team_name: str | None = None
    age_goe: int | None = None
    age_loe: int | None = None


class TeamStatsResponse(BaseModel):
    """팀별 통계 응답 스키마."""

    team_name: str
    average_age: float
    member_count: int


class TeamDetailResponse(BaseModel):
    """팀 상세 응답 스키마 — 소속 회원 목록 포함.

    Team detail with its members in id order.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    members: list[MemberDto]
