"""Create leads table

Revision ID: 3f1b6c2d9a40
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1b6c2d9a40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('leads',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.Text(), nullable=False),
        sa.Column('website_url', sa.Text(), nullable=False),
        sa.Column('performance_score', sa.Numeric(5, 2), nullable=True),
        sa.Column('accessibility_score', sa.Numeric(5, 2), nullable=True),
        sa.Column('best_practices_score', sa.Numeric(5, 2), nullable=True),
        sa.Column('seo_score', sa.Numeric(5, 2), nullable=True),
        sa.Column('analysis_data', sa.JSON(none_as_null=True), nullable=True),
        sa.Column('continue_requested', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('submitted_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_leads_email', 'leads', ['email'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_leads_email', table_name='leads')
    op.drop_table('leads')
