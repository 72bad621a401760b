"""create tenants, users, services, shifts, employee_services and slots tables

Revision ID: create_booking_schema
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID, ARRAY


# revision identifiers, used by Alembic.
revision: str = 'create_booking_schema'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

USER_ROLES = ('solution_owner', 'tenant_admin', 'receptionist', 'cashier', 'employee', 'customer')


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'tenants',
        sa.Column('tenant_id', UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('tenant_id'),
    )

    op.create_table(
        'users',
        sa.Column('user_id', UUID(as_uuid=True), nullable=False),
        sa.Column('tenant_id', UUID(as_uuid=True), nullable=True),
        sa.Column('full_name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('role', sa.Enum(*USER_ROLES, name='user_role'), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.tenant_id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('user_id'),
    )
    op.create_index(op.f('ix_users_tenant_id'), 'users', ['tenant_id'], unique=False)

    op.create_table(
        'services',
        sa.Column('service_id', UUID(as_uuid=True), nullable=False),
        sa.Column('tenant_id', UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('capacity_per_slot', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint('duration_minutes > 0', name='ck_services_duration_positive'),
        sa.CheckConstraint('capacity_per_slot > 0', name='ck_services_capacity_positive'),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.tenant_id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('service_id'),
        sa.UniqueConstraint('tenant_id', 'name', name='uq_services_tenant_name'),
    )
    op.create_index(op.f('ix_services_tenant_id'), 'services', ['tenant_id'], unique=False)

    op.create_table(
        'shifts',
        sa.Column('shift_id', UUID(as_uuid=True), nullable=False),
        sa.Column('tenant_id', UUID(as_uuid=True), nullable=False),
        sa.Column('service_id', UUID(as_uuid=True), nullable=False),
        sa.Column('days_of_week', ARRAY(sa.Integer()), nullable=False),
        sa.Column('start_time_utc', sa.Time(), nullable=False),
        sa.Column('end_time_utc', sa.Time(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint('array_length(days_of_week, 1) > 0', name='ck_shifts_days_not_empty'),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.tenant_id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['service_id'], ['services.service_id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('shift_id'),
    )
    op.create_index(op.f('ix_shifts_tenant_id'), 'shifts', ['tenant_id'], unique=False)
    op.create_index(op.f('ix_shifts_service_id'), 'shifts', ['service_id'], unique=False)

    op.create_table(
        'employee_services',
        sa.Column('assignment_id', UUID(as_uuid=True), nullable=False),
        sa.Column('tenant_id', UUID(as_uuid=True), nullable=False),
        sa.Column('employee_id', UUID(as_uuid=True), nullable=False),
        sa.Column('service_id', UUID(as_uuid=True), nullable=False),
        sa.Column('shift_id', UUID(as_uuid=True), nullable=True),
        sa.Column('duration_minutes', sa.Integer(), nullable=True),
        sa.Column('capacity_per_slot', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint('duration_minutes IS NULL OR duration_minutes > 0', name='ck_employee_services_duration_positive'),
        sa.CheckConstraint('capacity_per_slot IS NULL OR capacity_per_slot > 0', name='ck_employee_services_capacity_positive'),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.tenant_id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['employee_id'], ['users.user_id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['service_id'], ['services.service_id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['shift_id'], ['shifts.shift_id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('assignment_id'),
    )
    op.create_index(op.f('ix_employee_services_employee_id'), 'employee_services', ['employee_id'], unique=False)
    op.create_index(op.f('ix_employee_services_service_id'), 'employee_services', ['service_id'], unique=False)
    op.create_index(op.f('ix_employee_services_shift_id'), 'employee_services', ['shift_id'], unique=False)

    op.create_table(
        'slots',
        sa.Column('slot_id', UUID(as_uuid=True), nullable=False),
        sa.Column('tenant_id', UUID(as_uuid=True), nullable=False),
        sa.Column('service_id', UUID(as_uuid=True), nullable=False),
        sa.Column('shift_id', UUID(as_uuid=True), nullable=False),
        sa.Column('employee_id', UUID(as_uuid=True), nullable=True),
        sa.Column('slot_date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('end_time', sa.Time(), nullable=False),
        sa.Column('start_time_utc', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time_utc', sa.DateTime(timezone=True), nullable=False),
        sa.Column('total_capacity', sa.Integer(), nullable=False),
        sa.Column('available_capacity', sa.Integer(), nullable=False),
        sa.Column('booked_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_available', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint('total_capacity > 0', name='ck_slots_total_capacity_positive'),
        sa.CheckConstraint('available_capacity >= 0', name='ck_slots_available_capacity_nonneg'),
        sa.CheckConstraint('booked_count >= 0', name='ck_slots_booked_count_nonneg'),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.tenant_id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['service_id'], ['services.service_id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['shift_id'], ['shifts.shift_id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['employee_id'], ['users.user_id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('slot_id'),
        sa.UniqueConstraint('shift_id', 'employee_id', 'slot_date', 'start_time', name='uq_slots_shift_employee_date_start'),
    )
    op.create_index('ix_slots_shift_date', 'slots', ['shift_id', 'slot_date'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_slots_shift_date', table_name='slots')
    op.drop_table('slots')
    op.drop_index(op.f('ix_employee_services_shift_id'), table_name='employee_services')
    op.drop_index(op.f('ix_employee_services_service_id'), table_name='employee_services')
    op.drop_index(op.f('ix_employee_services_employee_id'), table_name='employee_services')
    op.drop_table('employee_services')
    op.drop_index(op.f('ix_shifts_service_id'), table_name='shifts')
    op.drop_index(op.f('ix_shifts_tenant_id'), table_name='shifts')
    op.drop_table('shifts')
    op.drop_index(op.f('ix_services_tenant_id'), table_name='services')
    op.drop_table('services')
    op.drop_index(op.f('ix_users_tenant_id'), table_name='users')
    op.drop_table('users')
    sa.Enum(name='user_role').drop(op.get_bind(), checkfirst=True)
    op.drop_table('tenants')
