"""Initial inventory schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2025-01-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create assets table
    op.create_table(
        'assets',
        sa.Column('id', sa.String(50), nullable=False),
        sa.Column('tag', sa.String(100), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('serial_number', sa.String(255), nullable=False, server_default=''),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('vendor', sa.String(255), nullable=False, server_default=''),
        sa.Column('purchase_date', sa.Date(), nullable=False),
        sa.Column('cost', sa.Float(), nullable=False, server_default='0'),
        sa.Column('status', sa.String(20), nullable=False, server_default='Available'),
        sa.Column('condition', sa.String(20), nullable=False, server_default='Good'),
        sa.Column('location', sa.String(255), nullable=False, server_default=''),
        sa.Column('assigned_to', sa.String(50), nullable=True),
        sa.Column('image', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_assets_tag', 'assets', ['tag'], unique=True)
    op.create_index('ix_assets_category', 'assets', ['category'], unique=False)
    op.create_index('ix_assets_assigned_to', 'assets', ['assigned_to'], unique=False)

    # Create employees table
    op.create_table(
        'employees',
        sa.Column('id', sa.String(50), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('department', sa.String(100), nullable=False, server_default=''),
        sa.Column('role', sa.String(100), nullable=False, server_default=''),
        sa.Column('join_date', sa.Date(), nullable=False),
        sa.Column('avatar', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_employees_email', 'employees', ['email'], unique=False)

    # Create assignments table; asset/employee references are not enforced
    op.create_table(
        'assignments',
        sa.Column('id', sa.String(50), nullable=False),
        sa.Column('asset_id', sa.String(50), nullable=False),
        sa.Column('employee_id', sa.String(50), nullable=False),
        sa.Column('borrow_date', sa.Date(), nullable=False),
        sa.Column('expected_return_date', sa.Date(), nullable=True),
        sa.Column('returned_date', sa.Date(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_assignments_asset_id', 'assignments', ['asset_id'], unique=False)
    op.create_index('ix_assignments_employee_id', 'assignments', ['employee_id'], unique=False)

    # Create maintenance_logs table
    op.create_table(
        'maintenance_logs',
        sa.Column('id', sa.String(50), nullable=False),
        sa.Column('asset_id', sa.String(50), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('vendor', sa.String(255), nullable=False, server_default=''),
        sa.Column('cost', sa.Float(), nullable=False, server_default='0'),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='In Progress'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_maintenance_logs_asset_id', 'maintenance_logs', ['asset_id'], unique=False)

    # Create asset_requests table
    op.create_table(
        'asset_requests',
        sa.Column('id', sa.String(50), nullable=False),
        sa.Column('employee_id', sa.String(50), nullable=True),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('reason', sa.Text(), nullable=False, server_default=''),
        sa.Column('status', sa.String(20), nullable=False, server_default='Pending'),
        sa.Column('request_date', sa.Date(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_asset_requests_employee_id', 'asset_requests', ['employee_id'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_asset_requests_employee_id', table_name='asset_requests')
    op.drop_table('asset_requests')

    op.drop_index('ix_maintenance_logs_asset_id', table_name='maintenance_logs')
    op.drop_table('maintenance_logs')

    op.drop_index('ix_assignments_employee_id', table_name='assignments')
    op.drop_index('ix_assignments_asset_id', table_name='assignments')
    op.drop_table('assignments')

    op.drop_index('ix_employees_email', table_name='employees')
    op.drop_table('employees')

    op.drop_index('ix_assets_assigned_to', table_name='assets')
    op.drop_index('ix_assets_category', table_name='assets')
    op.drop_index('ix_assets_tag', table_name='assets')
    op.drop_table('assets')
