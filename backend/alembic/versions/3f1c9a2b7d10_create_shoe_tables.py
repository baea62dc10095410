"""Create shoe, shoe_model, image and shoe_file tables

Revision ID: 3f1c9a2b7d10
Revises: 
Create Date: 2026-10-18 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# Revision identifiers used by Alembic
revision: str = '3f1c9a2b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'shoe',
        sa.Column('id', sa.Integer(), sa.Identity(start=1000), primary_key=True),
        sa.Column('version', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('article_code', sa.Text(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('category', sa.String(length=16), nullable=True),
        sa.Column('price', sa.Numeric(8, 2), nullable=False),
        sa.Column('discount_rate', sa.Numeric(4, 3), nullable=False),
        sa.Column('available', sa.Boolean(), nullable=False),
        sa.Column('release_date', sa.Date(), nullable=True),
        sa.Column('homepage', sa.Text(), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('rating >= 0 AND rating <= 5'),
    )
    op.create_index('ix_shoe_article_code', 'shoe', ['article_code'], unique=True)

    # One model per shoe
    op.create_table(
        'shoe_model',
        sa.Column('id', sa.Integer(), sa.Identity(start=1000), primary_key=True),
        sa.Column('label', sa.Text(), nullable=False),
        sa.Column('color', sa.Text(), nullable=True),
        sa.Column('shoe_id', sa.Integer(), sa.ForeignKey('shoe.id', ondelete='CASCADE'), nullable=False, unique=True),
    )

    op.create_table(
        'image',
        sa.Column('id', sa.Integer(), sa.Identity(start=1000), primary_key=True),
        sa.Column('caption', sa.String(length=32), nullable=False),
        sa.Column('content_type', sa.String(length=16), nullable=False),
        sa.Column('shoe_id', sa.Integer(), sa.ForeignKey('shoe.id', ondelete='CASCADE'), nullable=False),
    )
    op.create_index('ix_image_shoe_id', 'image', ['shoe_id'])

    # At most one uploaded file per shoe
    op.create_table(
        'shoe_file',
        sa.Column('id', sa.Integer(), sa.Identity(start=1000), primary_key=True),
        sa.Column('data', sa.LargeBinary(), nullable=False),
        sa.Column('filename', sa.Text(), nullable=False),
        sa.Column('mimetype', sa.Text(), nullable=True),
        sa.Column('shoe_id', sa.Integer(), sa.ForeignKey('shoe.id', ondelete='CASCADE'), nullable=False),
    )
    op.create_index('ix_shoe_file_shoe_id', 'shoe_file', ['shoe_id'], unique=True)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_shoe_file_shoe_id', table_name='shoe_file')
    op.drop_table('shoe_file')
    op.drop_index('ix_image_shoe_id', table_name='image')
    op.drop_table('image')
    op.drop_table('shoe_model')
    op.drop_index('ix_shoe_article_code', table_name='shoe')
    op.drop_table('shoe')
