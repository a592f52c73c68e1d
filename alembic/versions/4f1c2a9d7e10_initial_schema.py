"""initial schema: users, resources, stocks, requests, alerts, notifications, audit

Revision ID: 4f1c2a9d7e10
Revises:
Create Date: 2026-10-19 10:12:44.118203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f1c2a9d7e10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('users',
                    sa.Column('id', sa.Integer(), nullable=False),
                    sa.Column('email', sa.String(length=255), nullable=False),
                    sa.Column('username', sa.String(length=50), nullable=True),
                    sa.Column('password_hash', sa.String(length=255), nullable=False),
                    sa.Column('role', sa.String(length=20), nullable=False),
                    sa.Column('city', sa.String(length=100), nullable=True),
                    sa.Column('postal_code', sa.String(length=20), nullable=True),
                    sa.Column('first_name', sa.String(length=100), nullable=True),
                    sa.Column('last_name', sa.String(length=100), nullable=True),
                    sa.Column('is_professional', sa.Boolean(), nullable=True),
                    sa.Column('department', sa.Text(), nullable=True),
                    sa.Column('phone', sa.String(length=50), nullable=True),
                    sa.Column('is_active', sa.Boolean(), nullable=True),
                    sa.Column('created_at', sa.DateTime(), nullable=True),
                    sa.Column('updated_at', sa.DateTime(), nullable=True),
                    sa.Column('last_login_at', sa.DateTime(), nullable=True),
                    sa.PrimaryKeyConstraint('id'),
                    )
    op.create_index('ix_users_id', 'users', ['id'], unique=False)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table('auth_sessions',
                    sa.Column('id', sa.Integer(), nullable=False),
                    sa.Column('token', sa.String(length=128), nullable=False),
                    sa.Column('user_id', sa.Integer(), nullable=False),
                    sa.Column('created_at', sa.DateTime(), nullable=False),
                    sa.Column('expires_at', sa.DateTime(), nullable=False),
                    sa.ForeignKeyConstraint(['user_id'], ['users.id']),
                    sa.PrimaryKeyConstraint('id'),
                    )
    op.create_index('ix_auth_sessions_token', 'auth_sessions', ['token'], unique=True)
    op.create_index('ix_auth_sessions_user_id', 'auth_sessions', ['user_id'], unique=False)
    op.create_index('ix_auth_sessions_expires_at', 'auth_sessions', ['expires_at'], unique=False)

    op.create_table('resources',
                    sa.Column('id', sa.Integer(), nullable=False),
                    sa.Column('name', sa.String(length=255), nullable=False),
                    sa.Column('type', sa.String(length=20), nullable=False),
                    sa.Column('description', sa.Text(), nullable=True),
                    sa.Column('critical_level', sa.Integer(), nullable=True),
                    sa.Column('recommended_stock', sa.Integer(), nullable=True),
                    sa.PrimaryKeyConstraint('id'),
                    )
    op.create_index('ix_resources_name', 'resources', ['name'], unique=False)
    op.create_index('ix_resources_type', 'resources', ['type'], unique=False)

    op.create_table('stocks',
                    sa.Column('id', sa.Integer(), nullable=False),
                    sa.Column('resource_id', sa.Integer(), nullable=False),
                    sa.Column('city', sa.String(length=100), nullable=False),
                    sa.Column('postal_code', sa.String(length=20), nullable=False),
                    sa.Column('quantity', sa.Integer(), nullable=False),
                    sa.Column('last_restock_date', sa.DateTime(), nullable=True),
                    sa.Column('updated_by', sa.Integer(), nullable=True),
                    sa.Column('updated_at', sa.DateTime(), nullable=True),
                    sa.ForeignKeyConstraint(['resource_id'], ['resources.id']),
                    sa.ForeignKeyConstraint(['updated_by'], ['users.id']),
                    sa.PrimaryKeyConstraint('id'),
                    sa.UniqueConstraint('resource_id', 'city', name='uq_stocks_resource_city'),
                    )
    op.create_index('ix_stocks_resource_id', 'stocks', ['resource_id'], unique=False)
    op.create_index('ix_stocks_city', 'stocks', ['city'], unique=False)

    op.create_table('stock_history',
                    sa.Column('id', sa.Integer(), nullable=False),
                    sa.Column('resource_id', sa.Integer(), nullable=False),
                    sa.Column('city', sa.String(length=100), nullable=False),
                    sa.Column('previous_quantity', sa.Integer(), nullable=True),
                    sa.Column('new_quantity', sa.Integer(), nullable=False),
                    sa.Column('change_reason', sa.String(length=30), nullable=False),
                    sa.Column('updated_by', sa.Integer(), nullable=True),
                    sa.Column('created_at', sa.DateTime(), nullable=False),
                    sa.ForeignKeyConstraint(['resource_id'], ['resources.id']),
                    sa.ForeignKeyConstraint(['updated_by'], ['users.id']),
                    sa.PrimaryKeyConstraint('id'),
                    )
    op.create_index('ix_stock_history_resource_id', 'stock_history', ['resource_id'], unique=False)
    op.create_index('ix_stock_history_created_at', 'stock_history', ['created_at'], unique=False)
    op.create_index('idx_stock_history_resource_city', 'stock_history', ['resource_id', 'city'], unique=False)

    op.create_table('requests',
                    sa.Column('id', sa.Integer(), nullable=False),
                    sa.Column('user_id', sa.Integer(), nullable=False),
                    sa.Column('resource_id', sa.Integer(), nullable=False),
                    sa.Column('quantity', sa.Integer(), nullable=False),
                    sa.Column('status', sa.String(length=20), nullable=False),
                    sa.Column('urgency', sa.String(length=10), nullable=False),
                    sa.Column('city', sa.String(length=100), nullable=True),
                    sa.Column('approved_by', sa.Integer(), nullable=True),
                    sa.Column('estimated_delivery_date', sa.DateTime(), nullable=True),
                    sa.Column('notes', sa.Text(), nullable=True),
                    sa.Column('created_at', sa.DateTime(), nullable=True),
                    sa.Column('updated_at', sa.DateTime(), nullable=True),
                    sa.ForeignKeyConstraint(['user_id'], ['users.id']),
                    sa.ForeignKeyConstraint(['resource_id'], ['resources.id']),
                    sa.ForeignKeyConstraint(['approved_by'], ['users.id']),
                    sa.PrimaryKeyConstraint('id'),
                    )
    op.create_index('ix_requests_user_id', 'requests', ['user_id'], unique=False)
    op.create_index('ix_requests_resource_id', 'requests', ['resource_id'], unique=False)
    op.create_index('ix_requests_status', 'requests', ['status'], unique=False)
    op.create_index('ix_requests_created_at', 'requests', ['created_at'], unique=False)

    op.create_table('alerts',
                    sa.Column('id', sa.Integer(), nullable=False),
                    sa.Column('type', sa.String(length=20), nullable=False),
                    sa.Column('severity', sa.String(length=20), nullable=False),
                    sa.Column('message', sa.Text(), nullable=False),
                    sa.Column('city', sa.String(length=100), nullable=True),
                    sa.Column('resource_id', sa.Integer(), nullable=True),
                    sa.Column('active', sa.Boolean(), nullable=False),
                    sa.Column('created_by', sa.Integer(), nullable=True),
                    sa.Column('created_at', sa.DateTime(), nullable=True),
                    sa.Column('resolved_at', sa.DateTime(), nullable=True),
                    sa.ForeignKeyConstraint(['resource_id'], ['resources.id']),
                    sa.ForeignKeyConstraint(['created_by'], ['users.id']),
                    sa.PrimaryKeyConstraint('id'),
                    )
    op.create_index('ix_alerts_active', 'alerts', ['active'], unique=False)
    op.create_index('ix_alerts_created_at', 'alerts', ['created_at'], unique=False)

    op.create_table('notifications',
                    sa.Column('id', sa.Integer(), nullable=False),
                    sa.Column('user_id', sa.Integer(), nullable=False),
                    sa.Column('type', sa.String(length=30), nullable=False),
                    sa.Column('title', sa.String(length=255), nullable=False),
                    sa.Column('message', sa.Text(), nullable=False),
                    sa.Column('read', sa.Boolean(), nullable=False),
                    sa.Column('action_url', sa.String(length=500), nullable=True),
                    sa.Column('created_at', sa.DateTime(), nullable=True),
                    sa.ForeignKeyConstraint(['user_id'], ['users.id']),
                    sa.PrimaryKeyConstraint('id'),
                    )
    op.create_index('idx_notifications_user_read', 'notifications', ['user_id', 'read'], unique=False)

    op.create_table('audit_logs',
                    sa.Column('id', sa.Integer(), nullable=False),
                    sa.Column('user_id', sa.Integer(), nullable=True),
                    sa.Column('action', sa.String(length=30), nullable=False),
                    sa.Column('entity', sa.String(length=50), nullable=False),
                    sa.Column('entity_id', sa.Integer(), nullable=True),
                    sa.Column('old_value', sa.JSON(), nullable=True),
                    sa.Column('new_value', sa.JSON(), nullable=True),
                    sa.Column('ip_address', sa.String(length=64), nullable=True),
                    sa.Column('created_at', sa.DateTime(), nullable=True),
                    sa.ForeignKeyConstraint(['user_id'], ['users.id']),
                    sa.PrimaryKeyConstraint('id'),
                    )
    op.create_index('ix_audit_logs_created_at', 'audit_logs', ['created_at'], unique=False)
    op.create_index('idx_audit_entity', 'audit_logs', ['entity', 'entity_id'], unique=False)

    op.create_table('distribution_plan',
                    sa.Column('id', sa.Integer(), nullable=False),
                    sa.Column('resource_id', sa.Integer(), nullable=False),
                    sa.Column('from_city', sa.String(length=100), nullable=False),
                    sa.Column('to_city', sa.String(length=100), nullable=False),
                    sa.Column('quantity', sa.Integer(), nullable=False),
                    sa.Column('status', sa.String(length=20), nullable=False),
                    sa.Column('estimated_arrival', sa.DateTime(), nullable=True),
                    sa.Column('created_by', sa.Integer(), nullable=True),
                    sa.Column('created_at', sa.DateTime(), nullable=True),
                    sa.ForeignKeyConstraint(['resource_id'], ['resources.id']),
                    sa.ForeignKeyConstraint(['created_by'], ['users.id']),
                    sa.PrimaryKeyConstraint('id'),
                    )
    op.create_index('ix_distribution_plan_resource_id', 'distribution_plan', ['resource_id'], unique=False)
    op.create_index('ix_distribution_plan_created_at', 'distribution_plan', ['created_at'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('distribution_plan')
    op.drop_table('audit_logs')
    op.drop_table('notifications')
    op.drop_table('alerts')
    op.drop_table('requests')
    op.drop_table('stock_history')
    op.drop_table('stocks')
    op.drop_table('resources')
    op.drop_table('auth_sessions')
    op.drop_table('users')
