"""create_galleries_and_photos

Revision ID: 3b7c2e91a0d4
Revises:
Create Date: 2026-10-19 10:12:41.205318

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3b7c2e91a0d4'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'galleries',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_published', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_galleries_id'), 'galleries', ['id'], unique=False)
    # Authoritative backstop for slug uniqueness under concurrent creation
    op.create_index(op.f('ix_galleries_slug'), 'galleries', ['slug'], unique=True)

    op.create_table(
        'gallery_photos',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('gallery_id', sa.Integer(), nullable=False),
        sa.Column('url', sa.String(length=2048), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['gallery_id'], ['galleries.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_gallery_photos_id'), 'gallery_photos', ['id'], unique=False)
    op.create_index(op.f('ix_gallery_photos_gallery_id'), 'gallery_photos', ['gallery_id'], unique=False)
    op.create_index(
        'ix_gallery_photos_gallery_id_order',
        'gallery_photos',
        ['gallery_id', 'order'],
        unique=False
    )


def downgrade() -> None:
    op.drop_index('ix_gallery_photos_gallery_id_order', table_name='gallery_photos')
    op.drop_index(op.f('ix_gallery_photos_gallery_id'), table_name='gallery_photos')
    op.drop_index(op.f('ix_gallery_photos_id'), table_name='gallery_photos')
    op.drop_table('gallery_photos')

    op.drop_index(op.f('ix_galleries_slug'), table_name='galleries')
    op.drop_index(op.f('ix_galleries_id'), table_name='galleries')
    op.drop_table('galleries')
