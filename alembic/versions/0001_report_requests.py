"""Create report_requests table

Revision ID: 0001
Revises:
Create Date: 2026-10-17 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'report_requests',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('request_id', sa.String(36), nullable=False),
        sa.Column('kind', sa.String(20), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('error_message', sa.Text(), nullable=True),
        sa.Column('output_location', sa.String(512), nullable=True),
        sa.Column('processing_duration_ms', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_report_requests'),
        sa.UniqueConstraint('request_id', 'kind', name='uq_report_requests_request_id_kind'),
    )
    op.create_index('ix_report_requests_request_id', 'report_requests', ['request_id'])
    op.create_index('ix_report_requests_status', 'report_requests', ['status'])


def downgrade() -> None:
    op.drop_index('ix_report_requests_status', table_name='report_requests')
    op.drop_index('ix_report_requests_request_id', table_name='report_requests')
    op.drop_table('report_requests')
