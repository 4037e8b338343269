"""create_enriched_articles_table

Revision ID: 7c1e2a9b4d10
Revises:
Create Date: 2026-01-18 09:12:44.318205

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '7c1e2a9b4d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create enriched_articles with a unique source identifier."""
    op.create_table('enriched_articles',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('original_id', sa.String(length=255), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('simplified_text', sa.Text(), nullable=False),
        sa.Column('chinese_summary', sa.Text(), nullable=False),
        sa.Column('core_vocabulary', sa.JSON(), nullable=False),
        sa.Column('vocabulary_details', sa.JSON(), nullable=True),
        sa.Column('pub_date', sa.DateTime(), nullable=False),
        sa.Column('image_url', sa.String(length=1000), nullable=True),
        sa.Column('category', sa.String(length=100), nullable=True),
        sa.Column('source', sa.String(length=200), nullable=True),
        sa.Column('original_url', sa.String(length=1000), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('original_id')
    )

    op.create_index('ix_enriched_articles_category', 'enriched_articles', ['category'])
    op.create_index('ix_enriched_articles_pub_date', 'enriched_articles', ['pub_date'])


def downgrade() -> None:
    """Drop enriched_articles table and indexes."""
    op.drop_index('ix_enriched_articles_pub_date', 'enriched_articles')
    op.drop_index('ix_enriched_articles_category', 'enriched_articles')
    op.drop_table('enriched_articles')
