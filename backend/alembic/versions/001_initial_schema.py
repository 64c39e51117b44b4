"""Initial schema: store_settings and page_documents.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-17

store_settings holds one JSON value per (tenant_id, setting_key).
page_documents carries the navigation metadata of published pages.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'store_settings',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('tenant_id', sa.String(64), nullable=False),
        sa.Column('setting_key', sa.String(64), nullable=False),
        sa.Column('setting_value', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint(
            'tenant_id', 'setting_key', name='uq_store_settings_tenant_key',
        ),
    )
    op.create_index('ix_store_settings_tenant_id', 'store_settings', ['tenant_id'])

    op.create_table(
        'page_documents',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('tenant_id', sa.String(64), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('slug', sa.String(200), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='draft'),
        sa.Column('navigation_placement', sa.String(10), nullable=True),
        sa.Column('footer_column', sa.Integer(), nullable=True),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_page_documents_tenant_id', 'page_documents', ['tenant_id'])


def downgrade() -> None:
    op.drop_index('ix_page_documents_tenant_id', table_name='page_documents')
    op.drop_table('page_documents')
    op.drop_index('ix_store_settings_tenant_id', table_name='store_settings')
    op.drop_table('store_settings')
