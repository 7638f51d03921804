"""initial_schema

Revision ID: 3f1c9a2b7d40
Revises:
Create Date: 2026-10-18 10:12:31.402117

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision: str = '3f1c9a2b7d40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('password_hash', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column('first_name', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column('last_name', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column('profile_image_url', sqlmodel.sql.sqltypes.AutoString(length=2048), nullable=True),
        sa.Column('email_verified', sa.Boolean(), nullable=False),
        sa.Column('email_verification_token', sqlmodel.sql.sqltypes.AutoString(length=64), nullable=True),
        sa.Column('email_verification_expires', sa.DateTime(), nullable=True),
        sa.Column('password_reset_token', sqlmodel.sql.sqltypes.AutoString(length=64), nullable=True),
        sa.Column('password_reset_expires', sa.DateTime(), nullable=True),
        sa.Column('is_admin', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_email_verification_token'), 'users', ['email_verification_token'], unique=False)
    op.create_index(op.f('ix_users_password_reset_token'), 'users', ['password_reset_token'], unique=False)

    op.create_table(
        'profiles',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('page_name', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('display_name', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('bio', sqlmodel.sql.sqltypes.AutoString(length=500), nullable=False),
        sa.Column('profile_image_url', sqlmodel.sql.sqltypes.AutoString(length=2048), nullable=True),
        sa.Column('profile_views', sa.Integer(), nullable=False),
        sa.Column('link_clicks', sa.Integer(), nullable=False),
        sa.Column('is_default', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_profiles_user_id'), 'profiles', ['user_id'], unique=False)
    op.create_index(op.f('ix_profiles_page_name'), 'profiles', ['page_name'], unique=True)
    # At most one default page per user
    op.create_index(
        'uq_profiles_one_default_per_user',
        'profiles',
        ['user_id'],
        unique=True,
        sqlite_where=sa.text('is_default'),
        postgresql_where=sa.text('is_default'),
    )

    op.create_table(
        'social_links',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('profile_id', sa.Uuid(), nullable=False),
        sa.Column('platform', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('title', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('url', sqlmodel.sql.sqltypes.AutoString(length=2048), nullable=False),
        sa.Column('description', sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('clicks', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_social_links_profile_id'), 'social_links', ['profile_id'], unique=False)
    op.create_index(op.f('ix_social_links_created_at'), 'social_links', ['created_at'], unique=False)

    op.create_table(
        'themes',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('profile_id', sa.Uuid(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('colors', sa.JSON(), nullable=False),
        sa.Column('gradients', sa.JSON(), nullable=False),
        sa.Column('fonts', sa.JSON(), nullable=False),
        sa.Column('layout', sa.JSON(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_themes_profile_id'), 'themes', ['profile_id'], unique=False)
    # At most one active theme per profile
    op.create_index(
        'uq_themes_one_active_per_profile',
        'themes',
        ['profile_id'],
        unique=True,
        sqlite_where=sa.text('is_active'),
        postgresql_where=sa.text('is_active'),
    )

    op.create_table(
        'sessions',
        sa.Column('sid', sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column('sess', sa.JSON(), nullable=False),
        sa.Column('expire', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('sid'),
    )
    op.create_index(op.f('ix_sessions_expire'), 'sessions', ['expire'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_sessions_expire'), table_name='sessions')
    op.drop_table('sessions')
    op.drop_index('uq_themes_one_active_per_profile', table_name='themes')
    op.drop_index(op.f('ix_themes_profile_id'), table_name='themes')
    op.drop_table('themes')
    op.drop_index(op.f('ix_social_links_created_at'), table_name='social_links')
    op.drop_index(op.f('ix_social_links_profile_id'), table_name='social_links')
    op.drop_table('social_links')
    op.drop_index('uq_profiles_one_default_per_user', table_name='profiles')
    op.drop_index(op.f('ix_profiles_page_name'), table_name='profiles')
    op.drop_index(op.f('ix_profiles_user_id'), table_name='profiles')
    op.drop_table('profiles')
    op.drop_index(op.f('ix_users_password_reset_token'), table_name='users')
    op.drop_index(op.f('ix_users_email_verification_token'), table_name='users')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
