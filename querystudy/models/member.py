"""회원 SQLAlchemy ORM 모델 정의.

Member SQLAlchemy ORM model definition.

Tables:
    - members: 회원 (Members, optionally assigned to one team)
"""

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from querystudy.database import Base
from querystudy.models.team import Team


class Member(Base):
    """회원 모델 — 이름, 나이, 소속 팀.

    Member model — Name, age and owning team.
    A member has no team or references exactly one persisted team.

    Attributes:
        id: 고유 식별자 (Auto-increment identifier)
        username: 회원 이름 (Display name, nullable)
        age: 나이 (Age, defaults to 0)
        team_id: 소속 팀 FK (Owning team foreign key, nullable)

    Relationships:
        team: 소속 팀 (Owning team, lazy loaded unless fetched with a join)
    """

    __tablename__ = "members"
    __table_args__ = (
        Index("ix_members_team", "team_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 회원 이름 — 정렬 시 NULL 처리 예제를 위해 nullable (Nullable for null-ordering examples)
    username: Mapped[str | None] = mapped_column(String(100), nullable=True)
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    team_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("teams.id"), nullable=True)

    # 관계 — Relationships
    team = relationship("Team", back_populates="members")

    def __init__(self, username: str | None = None, age: int = 0, team: Team | None = None) -> None:
        super().__init__(username=username, age=age)
        if team is not None:
            self.change_team(team)

    def change_team(self, team: Team) -> None:
        """소속 팀을 변경합니다.

        Assign the member to a team; the backref appends it to team.members.
        """
        self.team = team

    def __repr__(self) -> str:
        # team은 지연 로딩 대상이므로 출력하지 않음 (team is lazy, never touched here)
        return f"Member(id={self.id}, username={self.username}, age={self.age})"
