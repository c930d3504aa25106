"""create content tables

Revision ID: 4c1e7a92d3b0
Revises:
Create Date: 2026-10-19 09:12:44.218406

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c1e7a92d3b0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _audit_columns() -> list:
    return [
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('is_deleted', sa.Boolean(), nullable=False),
        sa.Column('created_by', sa.String(length=255), nullable=True),
        sa.Column('updated_by', sa.String(length=255), nullable=True),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'programs',
        *_audit_columns(),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('description', sa.String(length=2000), nullable=False),
        sa.Column('thumbnail_url', sa.String(length=1000), nullable=False),
        sa.Column('video_url', sa.String(length=1000), nullable=False),
        sa.Column('duration', sa.Interval(), nullable=False),
        sa.Column('published_date', sa.DateTime(), nullable=False),
        sa.Column('type', sa.Integer(), nullable=False),
        sa.Column('language', sa.Integer(), nullable=False),
        sa.Column('status', sa.Integer(), nullable=False),
        sa.Column('view_count', sa.Integer(), nullable=False),
        sa.Column('rating', sa.Numeric(precision=3, scale=2), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    for column in ('title', 'type', 'language', 'status', 'published_date', 'is_deleted'):
        op.create_index(f'ix_programs_{column}', 'programs', [column])

    op.create_table(
        'categories',
        *_audit_columns(),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.String(length=1000), nullable=False),
        sa.Column('color', sa.String(length=7), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_categories_name', 'categories', ['name'], unique=True)
    op.create_index('ix_categories_is_deleted', 'categories', ['is_deleted'])

    op.create_table(
        'tags',
        *_audit_columns(),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_tags_name', 'tags', ['name'], unique=True)
    op.create_index('ix_tags_is_deleted', 'tags', ['is_deleted'])

    op.create_table(
        'comments',
        *_audit_columns(),
        sa.Column('content', sa.String(length=2000), nullable=False),
        sa.Column('user_name', sa.String(length=100), nullable=False),
        sa.Column('user_email', sa.String(length=200), nullable=False),
        sa.Column('is_approved', sa.Boolean(), nullable=False),
        sa.Column('program_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['program_id'], ['programs.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_comments_program_id', 'comments', ['program_id'])
    op.create_index('ix_comments_is_deleted', 'comments', ['is_deleted'])

    op.create_table(
        'program_categories',
        sa.Column('program_id', sa.Uuid(), nullable=False),
        sa.Column('category_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['program_id'], ['programs.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['category_id'], ['categories.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('program_id', 'category_id'),
    )

    op.create_table(
        'program_tags',
        sa.Column('program_id', sa.Uuid(), nullable=False),
        sa.Column('tag_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['program_id'], ['programs.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tag_id'], ['tags.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('program_id', 'tag_id'),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('program_tags')
    op.drop_table('program_categories')
    op.drop_table('comments')
    op.drop_table('tags')
    op.drop_table('categories')
    op.drop_table('programs')
