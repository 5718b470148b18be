"""add ai_usage table

Revision ID: 8c4d2e6f1a05
Revises: 3e1f0a9c2b71
Create Date: 2026-10-12 18:40:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8c4d2e6f1a05'
down_revision: Union[str, Sequence[str], None] = '3e1f0a9c2b71'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    tables = inspector.get_table_names()
    if 'ai_usage' not in tables:
        op.create_table(
            'ai_usage',
            sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
            sa.Column('user_id', sa.String(), nullable=False),
            sa.Column('call_type', sa.String(length=40), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        )
        op.create_index('ix_ai_usage_id', 'ai_usage', ['id'])
        op.create_index('ix_ai_usage_user_id', 'ai_usage', ['user_id'])


def downgrade() -> None:
    # Safe drop if exists
    op.execute('DROP TABLE IF EXISTS ai_usage')
