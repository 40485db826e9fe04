"""Create users, motels and rooms tables

Revision ID: 20261017_000001
Revises: None
Create Date: 2026-10-17

Rentable resources and the users who own or rent them. Room status and
current_tenant_id are only written by contract operations.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261017_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

OCCUPANCY = ('VACANT', 'OCCUPIED', 'MAINTENANCE')


def upgrade() -> None:
    """Create the users, motels and rooms tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('phone_number', sa.String(length=50), nullable=True),
        sa.Column(
            'role',
            sa.Enum('ADMIN', 'LANDLORD', 'TENANT', name='user_role'),
            nullable=False,
            server_default='TENANT'
        ),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'motels',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('address', sa.String(length=500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('total_rooms', sa.Integer(), nullable=False, server_default='0'),
        sa.Column(
            'status',
            sa.Enum(*OCCUPANCY, name='motel_status'),
            nullable=False,
            server_default='VACANT'
        ),
        sa.Column('monthly_rent', sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column('payment_cycle_months', sa.Integer(), nullable=True),
        sa.Column('deposit_months', sa.Integer(), nullable=True),
        sa.Column('electricity_cost_per_kwh', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('water_cost_per_cubic_meter', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('internet_cost', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('parking_cost', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('has_wifi', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('has_parking', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('allow_pets', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('allow_cooking', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('regulations', sa.Text(), nullable=True),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], name='fk_motels_owner_id'),
    )
    op.create_index('ix_motels_owner_id', 'motels', ['owner_id'])

    op.create_table(
        'rooms',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('number', sa.String(length=50), nullable=False),
        sa.Column('address', sa.String(length=500), nullable=True),
        sa.Column('area', sa.Numeric(precision=8, scale=2), nullable=True),
        sa.Column('floor', sa.Integer(), nullable=True),
        sa.Column('price', sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column('payment_cycle_months', sa.Integer(), nullable=True),
        sa.Column('deposit_months', sa.Integer(), nullable=True),
        sa.Column(
            'status',
            sa.Enum(*OCCUPANCY, name='room_status'),
            nullable=False,
            server_default='VACANT'
        ),
        sa.Column('current_tenant_id', sa.Integer(), nullable=True),
        sa.Column('max_occupancy', sa.Integer(), nullable=True),
        sa.Column('electricity_cost_per_kwh', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('water_cost_per_cubic_meter', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('internet_cost', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('parking_cost', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('service_fee', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('has_wifi', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('has_parking', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('allow_pets', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('allow_cooking', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('motel_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], name='fk_rooms_owner_id'),
        sa.ForeignKeyConstraint(['current_tenant_id'], ['users.id'], name='fk_rooms_current_tenant_id'),
        sa.ForeignKeyConstraint(['motel_id'], ['motels.id'], name='fk_rooms_motel_id'),
    )
    op.create_index('ix_rooms_owner_id', 'rooms', ['owner_id'])
    op.create_index('ix_rooms_status', 'rooms', ['status'])


def downgrade() -> None:
    """Drop the rooms, motels and users tables."""
    op.drop_index('ix_rooms_status', table_name='rooms')
    op.drop_index('ix_rooms_owner_id', table_name='rooms')
    op.drop_table('rooms')
    op.drop_index('ix_motels_owner_id', table_name='motels')
    op.drop_table('motels')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')

    sa.Enum(name='room_status').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='motel_status').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='user_role').drop(op.get_bind(), checkfirst=True)
