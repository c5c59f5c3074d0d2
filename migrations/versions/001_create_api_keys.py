"""Create api_keys table

Revision ID: 001
Revises:
Create Date: 2026-10-19

Mirrors the hosted api_keys table. SQLite databases created by
``flask init-db`` already match this revision; mark them with:
    alembic stamp 001
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'api_keys',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('name', sa.Text, nullable=False),
        sa.Column('value', sa.Text, nullable=False),
        sa.Column('user_id', sa.Text, nullable=False),
        sa.Column('usage_count', sa.Integer, nullable=False, server_default='0'),
        sa.Column('max_usage', sa.Integer, nullable=False),
        sa.Column('createdAt', sa.DateTime, server_default=sa.func.current_timestamp()),
    )
    op.create_index('idx_api_keys_user_id', 'api_keys', ['user_id'])


def downgrade() -> None:
    op.drop_index('idx_api_keys_user_id', table_name='api_keys')
    op.drop_table('api_keys')
