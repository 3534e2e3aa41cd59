"""Add users, request metadata and ticket messages

Revision ID: 002_add_users_table
Revises: 001_initial_schema
Create Date: 2025-01-01 00:00:01.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '002_add_users_table'
down_revision: Union[str, None] = '001_initial_schema'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.String(50), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False, server_default='user'),
        sa.Column('employee_id', sa.String(50), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_employee_id', 'users', ['employee_id'], unique=False)

    # Who filed each request and from where
    op.create_table(
        'request_metadata',
        sa.Column('id', sa.String(60), nullable=False),
        sa.Column('request_id', sa.String(50), nullable=False),
        sa.Column('user_id', sa.String(50), nullable=True),
        sa.Column('user_name', sa.String(255), nullable=True),
        sa.Column('user_email', sa.String(255), nullable=True),
        sa.Column('request_ip', sa.String(64), nullable=True),
        sa.ForeignKeyConstraint(['request_id'], ['asset_requests.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('request_id')
    )
    op.create_index('ix_request_metadata_user_id', 'request_metadata', ['user_id'], unique=False)

    # Ticket chat
    op.create_table(
        'ticket_messages',
        sa.Column('id', sa.String(50), nullable=False),
        sa.Column('request_id', sa.String(50), nullable=False),
        sa.Column('sender_id', sa.String(50), nullable=False),
        sa.Column('sender_name', sa.String(255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['request_id'], ['asset_requests.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_ticket_messages_request_id', 'ticket_messages', ['request_id'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_ticket_messages_request_id', table_name='ticket_messages')
    op.drop_table('ticket_messages')

    op.drop_index('ix_request_metadata_user_id', table_name='request_metadata')
    op.drop_table('request_metadata')

    op.drop_index('ix_users_employee_id', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
