"""팀 SQLAlchemy ORM 모델 정의.

Team SQLAlchemy ORM model definition.

Tables:
    - teams: 팀 (Teams, parent side of the member association)
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from querystudy.database import Base


class Team(Base):
    """팀 모델 — 회원이 소속되는 그룹.

    Team model — Group that members belong to.
    Holds the inverse side of the Member.team many-to-one association.

    Attributes:
        id: 고유 식별자 (Auto-increment identifier)
        name: 팀 이름 (Team display name)

    Relationships:
        members: 소속 회원 목록 (Members of this team)
    """

    __tablename__ = "teams"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 팀 이름 (Team display name, e.g. "teamA")
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    # 관계 — Relationships
    members = relationship("Member", back_populates="team", order_by="Member.id")

    def __repr__(self) -> str:
        return f"Team(id={self.id}, name={self.name})"
