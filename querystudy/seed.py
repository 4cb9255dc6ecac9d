"""초기 데이터 시드 스크립트 — 팀 2개와 회원 생성.

Seed script — Creates teamA, teamB and SEED_MEMBER_COUNT members.
Member i is named "member{i}", is i years old and alternates between
teamA (even i) and teamB (odd i).

Usage:
    python -m querystudy.seed

Idempotent: 팀이 이미 있으면 건너뜁니다 (Skips when any team exists).
"""

import asyncio

from sqlalchemy import select

from querystudy.config import settings
from querystudy.database import Base, async_session, engine
from querystudy.models import Member, Team
from querystudy.repositories.member_repository import member_repository
from querystudy.repositories.team_repository import team_repository


def build_members(count: int, team_a: Team, team_b: Team) -> list[Member]:
    """시드 회원 목록을 생성합니다."""
    return [
        Member(f"member{i}", i, team_a if i % 2 == 0 else team_b)
        for i in range(count)
    ]


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다."""
    # 테이블 생성 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        result = await db.execute(select(Team).limit(1))
        if result.scalar_one_or_none():
            print("Already seeded. Skipping.")
            return

        team_a: Team = Team(name="teamA")
        team_b: Team = Team(name="teamB")
        await team_repository.add_all(db, [team_a, team_b])  # 팀을 먼저 저장 (Teams first)

        await member_repository.add_all(db, build_members(settings.SEED_MEMBER_COUNT, team_a, team_b))
        await db.commit()

        print(f"Seeded 2 teams and {settings.SEED_MEMBER_COUNT} members.")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
