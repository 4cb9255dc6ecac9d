"""시드 데이터 구성 테스트."""

from sqlalchemy.ext.asyncio import AsyncSession

from querystudy.models import Team
from querystudy.repositories.member_repository import member_repository
from querystudy.repositories.team_repository import team_repository
from querystudy.seed import build_members


def test_build_members_alternates_teams():
    team_a, team_b = Team(name="teamA"), Team(name="teamB")

    members = build_members(4, team_a, team_b)

    assert [(m.username, m.age) for m in members] == [
        ("member0", 0),
        ("member1", 1),
        ("member2", 2),
        ("member3", 3),
    ]
    assert [m.team for m in members] == [team_a, team_b, team_a, team_b]
    assert team_a.members == [members[0], members[2]]


async def test_seeded_members_stats(db: AsyncSession):
    """member0~99: 짝수는 teamA, 홀수는 teamB."""
    team_a, team_b = Team(name="teamA"), Team(name="teamB")
    await team_repository.add_all(db, [team_a, team_b])
    await member_repository.add_all(db, build_members(100, team_a, team_b))

    assert await member_repository.count(db) == 100
    stats = await team_repository.get_stats(db)
    assert [(row.team_name, float(row.average_age), row.member_count) for row in stats] == [
        ("teamA", 49.0, 50),
        ("teamB", 50.0, 50),
    ]
