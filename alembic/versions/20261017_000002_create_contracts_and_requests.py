"""Create contracts and contract_requests tables

Revision ID: 20261017_000002
Revises: 20261017_000001
Create Date: 2026-10-17

Contracts rent exactly one of a room or a motel (room_id / motel_id
matching type). contract_requests.contract_id points at the contract an
approved request produced and is cleared before that contract is deleted.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261017_000002'
down_revision: Union[str, None] = '20261017_000001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

UTILITY_COLUMNS = (
    'electricity_cost_per_kwh',
    'water_cost_per_cubic_meter',
    'internet_cost',
    'parking_cost',
    'service_fee',
)


def upgrade() -> None:
    """Create the contracts and contract_requests tables."""
    op.create_table(
        'contracts',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('type', sa.Enum('ROOM', 'MOTEL', name='contract_type'), nullable=False, server_default='ROOM'),
        sa.Column('room_id', sa.Integer(), nullable=True),
        sa.Column('motel_id', sa.Integer(), nullable=True),
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('monthly_rent', sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column('deposit', sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column('payment_cycle_months', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('payment_day', sa.Integer(), nullable=False, server_default='5'),
        sa.Column('max_occupants', sa.Integer(), nullable=False, server_default='4'),
        *[
            sa.Column(name, sa.Numeric(precision=12, scale=2), nullable=False)
            for name in UTILITY_COLUMNS
        ],
        sa.Column('has_wifi', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('has_parking', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            'status',
            sa.Enum('PENDING_TENANT', 'ACTIVE', 'TERMINATED', 'EXPIRED', name='contract_status'),
            nullable=False,
            server_default='PENDING_TENANT'
        ),
        sa.Column('document_content', sa.Text(), nullable=True),
        sa.Column('special_terms', sa.Text(), nullable=True),
        sa.Column('regulations', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['room_id'], ['rooms.id'], name='fk_contracts_room_id'),
        sa.ForeignKeyConstraint(['motel_id'], ['motels.id'], name='fk_contracts_motel_id'),
        sa.ForeignKeyConstraint(['tenant_id'], ['users.id'], name='fk_contracts_tenant_id'),
        sa.CheckConstraint('end_date > start_date', name='ck_contracts_date_order'),
        sa.CheckConstraint(
            "(type = 'ROOM' AND room_id IS NOT NULL AND motel_id IS NULL) OR "
            "(type = 'MOTEL' AND motel_id IS NOT NULL AND room_id IS NULL)",
            name='ck_contracts_single_target'
        ),
    )
    op.create_index('ix_contracts_room_id', 'contracts', ['room_id'])
    op.create_index('ix_contracts_motel_id', 'contracts', ['motel_id'])
    op.create_index('ix_contracts_tenant_id', 'contracts', ['tenant_id'])
    op.create_index('ix_contracts_status', 'contracts', ['status'])

    op.create_table(
        'contract_requests',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('type', sa.Enum('ROOM', 'MOTEL', name='contract_request_type'), nullable=False, server_default='ROOM'),
        sa.Column(
            'initiated_by',
            sa.Enum('LANDLORD', 'TENANT', name='contract_request_initiator'),
            nullable=False
        ),
        sa.Column(
            'status',
            sa.Enum('PENDING', 'APPROVED', 'REJECTED', 'CANCELLED', name='contract_request_status'),
            nullable=False,
            server_default='PENDING'
        ),
        sa.Column('room_id', sa.Integer(), nullable=True),
        sa.Column('motel_id', sa.Integer(), nullable=True),
        sa.Column('landlord_id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('monthly_rent', sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column('deposit', sa.Numeric(precision=14, scale=2), nullable=False),
        *[
            sa.Column(name, sa.Numeric(precision=12, scale=2), nullable=True)
            for name in UTILITY_COLUMNS
        ],
        sa.Column('special_terms', sa.Text(), nullable=True),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('response_message', sa.Text(), nullable=True),
        sa.Column('responded_at', sa.DateTime(), nullable=True),
        sa.Column('contract_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['room_id'], ['rooms.id'], name='fk_contract_requests_room_id'),
        sa.ForeignKeyConstraint(['motel_id'], ['motels.id'], name='fk_contract_requests_motel_id'),
        sa.ForeignKeyConstraint(['landlord_id'], ['users.id'], name='fk_contract_requests_landlord_id'),
        sa.ForeignKeyConstraint(['tenant_id'], ['users.id'], name='fk_contract_requests_tenant_id'),
        sa.ForeignKeyConstraint(['contract_id'], ['contracts.id'], name='fk_contract_requests_contract_id'),
    )
    op.create_index('ix_contract_requests_status', 'contract_requests', ['status'])
    op.create_index('ix_contract_requests_landlord_id', 'contract_requests', ['landlord_id'])
    op.create_index('ix_contract_requests_tenant_id', 'contract_requests', ['tenant_id'])


def downgrade() -> None:
    """Drop the contract_requests and contracts tables."""
    op.drop_index('ix_contract_requests_tenant_id', table_name='contract_requests')
    op.drop_index('ix_contract_requests_landlord_id', table_name='contract_requests')
    op.drop_index('ix_contract_requests_status', table_name='contract_requests')
    op.drop_table('contract_requests')

    op.drop_index('ix_contracts_status', table_name='contracts')
    op.drop_index('ix_contracts_tenant_id', table_name='contracts')
    op.drop_index('ix_contracts_motel_id', table_name='contracts')
    op.drop_index('ix_contracts_room_id', table_name='contracts')
    op.drop_table('contracts')

    for enum_name in (
        'contract_request_status',
        'contract_request_initiator',
        'contract_request_type',
        'contract_status',
        'contract_type',
    ):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
