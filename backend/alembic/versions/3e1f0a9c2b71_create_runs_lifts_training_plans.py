"""create runs, lifts, training_plans

Revision ID: 3e1f0a9c2b71
Revises: 
Create Date: 2026-10-05 09:12:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3e1f0a9c2b71'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSON_DOC = sa.JSON().with_variant(postgresql.JSONB(), 'postgresql')


def upgrade() -> None:
    op.create_table(
        'runs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False, server_default='easy'),
        sa.Column('distance_miles', sa.Numeric(6, 2), nullable=False, server_default='0'),
        sa.Column('duration_seconds', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('perceived_effort', sa.Integer(), nullable=False, server_default='5'),
        sa.Column('notes', sa.String(), nullable=True),
        sa.Column('ai_feedback', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_runs_id', 'runs', ['id'])
    op.create_index('ix_runs_user_id', 'runs', ['user_id'])
    op.create_index('ix_runs_date', 'runs', ['date'])

    op.create_table(
        'lifts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('muscle_groups', JSON_DOC, nullable=False),
        sa.Column('intensity', sa.String(length=20), nullable=False, server_default='moderate'),
        sa.Column('duration_seconds', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('notes', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_lifts_id', 'lifts', ['id'])
    op.create_index('ix_lifts_user_id', 'lifts', ['user_id'])
    op.create_index('ix_lifts_date', 'lifts', ['date'])

    op.create_table(
        'training_plans',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('week_start', sa.Date(), nullable=False),
        sa.Column('plan_json', JSON_DOC, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_training_plans_id', 'training_plans', ['id'])
    op.create_index('ix_training_plans_user_id', 'training_plans', ['user_id'])


def downgrade() -> None:
    op.drop_table('training_plans')
    op.drop_table('lifts')
    op.drop_table('runs')
