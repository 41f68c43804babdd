"""add_moneybird_connections_table

Revision ID: 4c2d9e7a1b05
Revises:
Create Date: 2026-10-12 09:15:42.118204
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# Revision identifiers, used by Alembic
revision: str = '4c2d9e7a1b05'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Apply migration: add_moneybird_connections_table"""
    op.create_table('moneybird_connections',
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('access_token', sa.Text(), nullable=False),
        sa.Column('administration_id', sa.String(length=255), nullable=True, comment='Moneybird administration identifier'),
        sa.Column('connection_label', sa.String(length=255), nullable=False),
        sa.Column('auth_type', sa.String(length=20), nullable=False),
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', name='uq_moneybird_connections_user_id')
    )
    op.create_index('ix_moneybird_connections_user_id', 'moneybird_connections', ['user_id'], unique=False)


def downgrade() -> None:
    """Revert migration: add_moneybird_connections_table"""
    op.drop_index('ix_moneybird_connections_user_id', table_name='moneybird_connections')
    op.drop_table('moneybird_connections')
