"""Create bills and notifications tables

Revision ID: 20261017_000003
Revises: 20261017_000002
Create Date: 2026-10-17

bills.contract_id uses ON DELETE RESTRICT: a billed contract can only be
terminated, never deleted.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261017_000003'
down_revision: Union[str, None] = '20261017_000002'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the bills and notifications tables."""
    op.create_table(
        'bills',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('contract_id', sa.Integer(), nullable=False),
        sa.Column('month', sa.Date(), nullable=False),
        sa.Column('electricity_start', sa.Integer(), nullable=False),
        sa.Column('electricity_end', sa.Integer(), nullable=False),
        sa.Column('water_start', sa.Integer(), nullable=False),
        sa.Column('water_end', sa.Integer(), nullable=False),
        sa.Column('electricity_rate', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('water_rate', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('other_fees', sa.Numeric(precision=14, scale=2), nullable=False, server_default='0'),
        sa.Column('total_amount', sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column(
            'status',
            sa.Enum('PENDING', 'PAID', name='bill_status'),
            nullable=False,
            server_default='PENDING'
        ),
        sa.Column('paid_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['contract_id'],
            ['contracts.id'],
            name='fk_bills_contract_id',
            ondelete='RESTRICT'
        ),
        sa.UniqueConstraint('contract_id', 'month', name='uq_bills_contract_month'),
    )
    op.create_index('ix_bills_contract_id', 'bills', ['contract_id'])
    op.create_index('ix_bills_month', 'bills', ['month'])
    op.create_index('ix_bills_status', 'bills', ['status'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('to_user_id', sa.Integer(), nullable=False),
        sa.Column('created_by_id', sa.Integer(), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['to_user_id'], ['users.id'], name='fk_notifications_to_user_id'),
        sa.ForeignKeyConstraint(['created_by_id'], ['users.id'], name='fk_notifications_created_by_id'),
    )
    op.create_index('ix_notifications_to_user_id', 'notifications', ['to_user_id'])


def downgrade() -> None:
    """Drop the notifications and bills tables."""
    op.drop_index('ix_notifications_to_user_id', table_name='notifications')
    op.drop_table('notifications')

    op.drop_index('ix_bills_status', table_name='bills')
    op.drop_index('ix_bills_month', table_name='bills')
    op.drop_index('ix_bills_contract_id', table_name='bills')
    op.drop_table('bills')

    sa.Enum(name='bill_status').drop(op.get_bind(), checkfirst=True)
