"""Initial schema: users, versions, templates, resources, shares, refresh tokens

Revision ID: 3f1c2a9d7e41
Revises:
Create Date: 2026-10-18 09:12:05.114203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7e41'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Create all tables."""
    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('avatar_url', sa.String(length=500), nullable=True),
        sa.Column('password_hash', sa.String(length=255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('email'),
        sa.CheckConstraint('length(email) <= 255', name='ck_users_email_len'),
        sa.CheckConstraint('length(name) <= 100', name='ck_users_name_len'),
    )
    op.create_index('idx_users_email', 'users', ['email'])
    op.create_index('idx_users_active', 'users', ['is_active'])

    op.create_table(
        'versions',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=True),
        sa.Column('is_default', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('length(name) <= 100', name='ck_versions_name_len'),
    )
    op.create_index('idx_versions_user_id', 'versions', ['user_id'])
    op.create_index(
        'uq_versions_user_default', 'versions', ['user_id'],
        unique=True, postgresql_where=sa.text('is_default'),
    )

    op.create_table(
        'template_items',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('version_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('versions.id', ondelete='CASCADE'), nullable=True),
        sa.Column('period', sa.String(length=20), nullable=False),
        sa.Column('title', sa.String(length=300), nullable=False),
        sa.Column('completed', sa.Boolean(), nullable=False),
        sa.Column('priority', sa.String(length=10), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('length(title) <= 300', name='ck_template_items_title_len'),
        sa.CheckConstraint("priority IN ('high', 'medium', 'low')", name='ck_template_items_priority'),
    )
    op.create_index('idx_template_items_user_id', 'template_items', ['user_id'])
    op.create_index('idx_template_items_user_version', 'template_items', ['user_id', 'version_id'])

    op.create_table(
        'resource_categories',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('version_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('versions.id', ondelete='CASCADE'), nullable=True),
        sa.Column('category', sa.String(length=200), nullable=False),
        sa.Column('job', sa.Text(), nullable=False),
        sa.Column('situation', sa.Text(), nullable=False),
        sa.Column('outcome', sa.Text(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('length(category) <= 200', name='ck_resource_categories_category_len'),
    )
    op.create_index('idx_resource_categories_user_id', 'resource_categories', ['user_id'])
    op.create_index(
        'idx_resource_categories_user_version', 'resource_categories', ['user_id', 'version_id']
    )

    op.create_table(
        'resources',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('category_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('resource_categories.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('url', sa.String(length=2000), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('length(name) <= 200', name='ck_resources_name_len'),
    )
    op.create_index('idx_resources_category_id', 'resources', ['category_id'])

    op.create_table(
        'share_records',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('owner_user_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('version_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('versions.id', ondelete='SET NULL'), nullable=True),
        sa.Column('invite_token', sa.String(length=64), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.String(length=1000), nullable=True),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('max_clones', sa.Integer(), nullable=True),
        sa.Column('clone_count', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('invite_token'),
        sa.CheckConstraint('length(title) <= 200', name='ck_share_records_title_len'),
        sa.CheckConstraint('clone_count >= 0', name='ck_share_records_clone_count'),
        sa.CheckConstraint(
            'max_clones IS NULL OR clone_count <= max_clones', name='ck_share_records_clone_limit'
        ),
    )
    op.create_index('idx_share_records_owner', 'share_records', ['owner_user_id'])
    op.create_index('idx_share_records_token_active', 'share_records', ['invite_token', 'is_active'])

    op.create_table(
        'refresh_tokens',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('token', sa.String(length=255), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('token'),
    )
    op.create_index('idx_refresh_tokens_user_id', 'refresh_tokens', ['user_id'])
    op.create_index('idx_refresh_tokens_user_active', 'refresh_tokens', ['user_id', 'is_active'])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table('refresh_tokens')
    op.drop_table('share_records')
    op.drop_table('resources')
    op.drop_table('resource_categories')
    op.drop_table('template_items')
    op.drop_index('uq_versions_user_default', table_name='versions')
    op.drop_table('versions')
    op.drop_table('users')
