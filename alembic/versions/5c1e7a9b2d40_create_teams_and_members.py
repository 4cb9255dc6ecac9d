"""create_teams_and_members

Revision ID: 5c1e7a9b2d40
Revises:
Create Date: 2026-10-18 00:00:00.000000

팀/회원 테이블 생성: teams, members.
Create the teams and members tables.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5c1e7a9b2d40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'teams',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(100), nullable=False),
    )

    # members — 팀이 없는 회원을 허용 (team_id nullable)
    op.create_table(
        'members',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('username', sa.String(100), nullable=True),
        sa.Column('age', sa.Integer(), nullable=False, server_default=sa.text('0')),
        sa.Column('team_id', sa.Integer(), sa.ForeignKey('teams.id'), nullable=True),
    )

    op.create_index('ix_members_team', 'members', ['team_id'])


def downgrade() -> None:
    op.drop_index('ix_members_team', table_name='members')
    op.drop_table('members')
    op.drop_table('teams')
