"""users_and_applications

Revision ID: 3c1f9a2d7b64
Revises: 
Create Date: 2026-10-19 10:12:41.518302

Baseline: users and applications tables.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '3c1f9a2d7b64'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def table_exists(table_name: str) -> bool:
    """Check if a table exists in the database."""
    bind = op.get_bind()
    inspector = inspect(bind)
    return table_name in inspector.get_table_names()


def upgrade() -> None:
    """
    Creates both tables if they don't exist, so databases first built with
    init_db() can be stamped forward without errors.
    """
    if not table_exists('users'):
        op.create_table('users',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('email', sa.String(), nullable=False),
            sa.Column('password_hash', sa.String(), nullable=True),
            sa.Column('role', sa.String(), nullable=False),
            sa.Column('oauth_provider', sa.String(), nullable=True),
            sa.Column('oauth_id', sa.String(), nullable=True),
            sa.Column('avatar_url', sa.String(), nullable=True),
            sa.Column('recruiter_company', sa.String(), nullable=True),
            sa.Column('company', sa.String(), nullable=True),
            sa.Column('job_title', sa.String(), nullable=True),
            sa.Column('experience', sa.String(), nullable=True),
            sa.Column('skills', sa.String(), nullable=True),
            sa.Column('location', sa.String(), nullable=True),
            sa.Column('wished_salary', sa.String(), nullable=True),
            sa.Column('early_start_date', sa.DateTime(timezone=True), nullable=True),
            sa.Column('candidate_notes', sa.Text(), nullable=True),
            sa.Column('striving_for', sa.String(), nullable=True),
            sa.Column('reset_password_token', sa.String(), nullable=True),
            sa.Column('reset_password_expires', sa.DateTime(timezone=True), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
        op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
        op.create_index(op.f('ix_users_role'), 'users', ['role'], unique=False)
        op.create_index(op.f('ix_users_company'), 'users', ['company'], unique=False)
        op.create_index(op.f('ix_users_recruiter_company'), 'users', ['recruiter_company'], unique=False)
        op.create_index('idx_role_company', 'users', ['role', 'company'], unique=False)

    if not table_exists('applications'):
        op.create_table('applications',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('candidate_id', sa.Integer(), nullable=False),
            sa.Column('company', sa.String(), nullable=False),
            sa.Column('role', sa.String(), nullable=False),
            sa.Column('status', sa.String(), nullable=False),
            sa.Column('date', sa.DateTime(timezone=True), nullable=False),
            sa.Column('notes', sa.Text(), nullable=True),
            sa.Column('interview_time', sa.String(), nullable=True),
            sa.Column('interview_date', sa.DateTime(timezone=True), nullable=True),
            sa.Column('interview_location', sa.String(), nullable=True),
            sa.Column('interview_type', sa.String(), nullable=True),
            sa.Column('interview_notes', sa.Text(), nullable=True),
            sa.Column('recruiter_company', sa.String(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.ForeignKeyConstraint(['candidate_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_applications_id'), 'applications', ['id'], unique=False)
        op.create_index(op.f('ix_applications_candidate_id'), 'applications', ['candidate_id'], unique=False)
        op.create_index(op.f('ix_applications_recruiter_company'), 'applications', ['recruiter_company'], unique=False)
        op.create_index('idx_candidate_date', 'applications', ['candidate_id', 'date'], unique=False)


def downgrade() -> None:
    op.drop_table('applications')
    op.drop_table('users')
