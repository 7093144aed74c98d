"""initial schema: users, profiles, logs, prescriptions, reminder dismissals

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=True, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=True, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('full_name', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'profiles',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('dob', sa.DateTime(), nullable=True),
        sa.Column('type', sa.String(), nullable=False, server_default='general'),
        sa.Column('due_date', sa.DateTime(), nullable=True),
        sa.Column('sex', sa.String(), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_profiles_id', 'profiles', ['id'])
    op.create_index('ix_profiles_user_id', 'profiles', ['user_id'])

    op.create_table(
        'health_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('profile_id', sa.Integer(), sa.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('category', sa.String(), nullable=False),
        sa.Column('value', sa.Float(), nullable=True),
        sa.Column('start_time', sa.DateTime(), nullable=True),
        sa.Column('end_time', sa.DateTime(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('date', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        *_timestamps(),
    )
    op.create_index('ix_health_logs_id', 'health_logs', ['id'])
    op.create_index('ix_health_logs_profile_id', 'health_logs', ['profile_id'])
    op.create_index('ix_health_logs_profile_date', 'health_logs', ['profile_id', 'date'])

    op.create_table(
        'prescriptions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('profile_id', sa.Integer(), sa.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('dosage', sa.String(), nullable=True),
        sa.Column('frequency', sa.String(), nullable=False, server_default='daily'),
        sa.Column('start_date', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('end_date', sa.DateTime(), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_prescriptions_id', 'prescriptions', ['id'])
    op.create_index('ix_prescriptions_profile_id', 'prescriptions', ['profile_id'])
    op.create_index('ix_prescriptions_profile_active', 'prescriptions', ['profile_id', 'active'])

    op.create_table(
        'reminder_dismissals',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('key', sa.String(), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('user_id', 'key', name='uq_reminder_dismissals_user_key'),
    )
    op.create_index('ix_reminder_dismissals_id', 'reminder_dismissals', ['id'])
    op.create_index('ix_reminder_dismissals_user_id', 'reminder_dismissals', ['user_id'])
    op.create_index('ix_reminder_dismissals_key', 'reminder_dismissals', ['key'])
    op.create_index('ix_reminder_dismissals_expires_at', 'reminder_dismissals', ['expires_at'])


def downgrade() -> None:
    op.drop_table('reminder_dismissals')
    op.drop_table('prescriptions')
    op.drop_table('health_logs')
    op.drop_table('profiles')
    op.drop_table('users')
