"""create kandang and inventory tables

Revision ID: 3c1a9e5f7b20
Revises:
Create Date: 2026-10-19 09:12:41.318204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1a9e5f7b20'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'user',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('nama', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('role', sa.String(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_user_email', 'user', ['email'], unique=True)

    op.create_table(
        'kandang',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('nama', sa.String(), nullable=False),
        sa.Column('lokasi', sa.String(), nullable=False),
        sa.Column('longitude', sa.Float(precision=53), nullable=False),
        sa.Column('latitude', sa.Float(precision=53), nullable=False),
        sa.Column('jumlah_ayam', sa.Integer(), nullable=False),
        sa.Column('id_pemilik', sa.Uuid(), sa.ForeignKey('user.id'), nullable=False),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index('ix_kandang_id_pemilik', 'kandang', ['id_pemilik'])

    op.create_table(
        'inventory',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('stock', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('jenis', sa.String(), nullable=False),
        sa.Column('id_kandang', sa.Uuid(), sa.ForeignKey('kandang.id'), nullable=False),
        sa.Column('status', sa.Enum('ACTIVE', 'DELETED', name='inventory_status'), nullable=False, server_default='ACTIVE'),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        *_timestamps(),
    )
    op.create_index('ix_inventory_id_kandang', 'inventory', ['id_kandang'])

    op.create_table(
        'inventory_image',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('url', sa.String(length=500), nullable=False),
        sa.Column('id_inventory', sa.Uuid(), sa.ForeignKey('inventory.id'), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_inventory_image_id_inventory', 'inventory_image', ['id_inventory'])

    op.create_table(
        'log_inventory',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('id_inventory', sa.Uuid(), sa.ForeignKey('inventory.id'), nullable=False),
        sa.Column('keterangan', sa.Text(), nullable=False),
        sa.Column('field', sa.String(), nullable=True),
        sa.Column('old_value', sa.String(), nullable=True),
        sa.Column('new_value', sa.String(), nullable=True),
        sa.Column('created_by', sa.Uuid(), sa.ForeignKey('user.id'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_log_inventory_id_inventory', 'log_inventory', ['id_inventory'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_log_inventory_id_inventory', table_name='log_inventory')
    op.drop_table('log_inventory')
    op.drop_index('ix_inventory_image_id_inventory', table_name='inventory_image')
    op.drop_table('inventory_image')
    op.drop_index('ix_inventory_id_kandang', table_name='inventory')
    op.drop_table('inventory')
    sa.Enum(name='inventory_status').drop(op.get_bind(), checkfirst=True)
    op.drop_index('ix_kandang_id_pemilik', table_name='kandang')
    op.drop_table('kandang')
    op.drop_index('ix_user_email', table_name='user')
    op.drop_table('user')
