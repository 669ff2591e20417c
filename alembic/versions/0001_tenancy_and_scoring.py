"""tenants, memberships, tenant-owned recruiting tables and scoring events

Revision ID: 0001_tenancy_and_scoring
Revises: None
Create Date: 2026-10-17 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

revision = '0001_tenancy_and_scoring'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    ]


def _tenant_fk():
    return sa.Column('tenant_id', sa.String(36), sa.ForeignKey('tenants.id'), nullable=False, index=True)


def upgrade() -> None:
    op.create_table(
        'tenants',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(120), nullable=False),
        sa.Column('slug', sa.String(80), nullable=False, unique=True, index=True),
        sa.Column('plan', sa.String(20)),
        sa.Column('hiring_mode', sa.String(20)),
        sa.Column('scoring_config', sa.JSON()),
        *_timestamps(),
    )
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('global_role', sa.String(30), nullable=False, server_default='user'),
        *_timestamps(),
    )
    op.create_table(
        'tenant_memberships',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('tenant_id', sa.String(36), sa.ForeignKey('tenants.id'), nullable=False, index=True),
        sa.Column('role', sa.String(20), nullable=False, server_default='viewer'),
        sa.Column('is_primary', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.UniqueConstraint('user_id', 'tenant_id', name='uq_membership_user_tenant'),
    )
    op.create_table(
        'jobs',
        sa.Column('id', sa.Integer(), primary_key=True),
        _tenant_fk(),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('location', sa.String(200)),
        sa.Column('required_skills', sa.JSON()),
        sa.Column('hiring_mode', sa.String(20)),
        sa.Column('scoring_overrides', sa.JSON()),
        sa.Column('status', sa.String(20)),
        sa.Column('visibility', sa.String(20)),
        *_timestamps(),
    )
    op.create_table(
        'candidates',
        sa.Column('id', sa.Integer(), primary_key=True),
        _tenant_fk(),
        sa.Column('full_name', sa.String(200), nullable=False),
        sa.Column('email', sa.String(254), nullable=False),
        sa.Column('location', sa.String(200)),
        sa.Column('current_title', sa.String(200)),
        sa.Column('cv_url', sa.String(512)),
        sa.Column('linkedin_url', sa.String(512)),
        sa.Column('skills', sa.JSON()),
        *_timestamps(),
        sa.UniqueConstraint('tenant_id', 'email', name='uq_candidates_tenant_email'),
    )
    op.create_table(
        'applications',
        sa.Column('id', sa.Integer(), primary_key=True),
        _tenant_fk(),
        sa.Column('job_id', sa.Integer(), sa.ForeignKey('jobs.id'), nullable=False, index=True),
        sa.Column('candidate_id', sa.Integer(), sa.ForeignKey('candidates.id'), nullable=False, index=True),
        sa.Column('cv_url', sa.String(512)),
        sa.Column('cover_letter', sa.Text()),
        sa.Column('location', sa.String(200)),
        sa.Column('linkedin_url', sa.String(512)),
        sa.Column('source', sa.String(50)),
        sa.Column('stage', sa.String(50)),
        sa.Column('status', sa.String(50)),
        sa.Column('match_score', sa.Integer()),
        sa.Column('match_reason', sa.Text()),
        *_timestamps(),
    )
    op.create_table(
        'interviews',
        sa.Column('id', sa.Integer(), primary_key=True),
        _tenant_fk(),
        sa.Column('application_id', sa.Integer(), sa.ForeignKey('applications.id'), nullable=False),
        sa.Column('scheduled_at', sa.DateTime()),
        sa.Column('status', sa.String(20)),
        sa.Column('result', sa.String(20)),
        sa.Column('interviewer_id', sa.Integer()),
        *_timestamps(),
    )
    op.create_table(
        'notes',
        sa.Column('id', sa.Integer(), primary_key=True),
        _tenant_fk(),
        sa.Column('candidate_id', sa.Integer(), sa.ForeignKey('candidates.id'), nullable=False),
        sa.Column('author_id', sa.Integer()),
        sa.Column('body', sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        'tags',
        sa.Column('id', sa.Integer(), primary_key=True),
        _tenant_fk(),
        sa.Column('name', sa.String(80), nullable=False),
        sa.Column('color', sa.String(20)),
        *_timestamps(),
        sa.UniqueConstraint('tenant_id', 'name', name='uq_tags_tenant_name'),
    )
    op.create_table(
        'email_templates',
        sa.Column('id', sa.Integer(), primary_key=True),
        _tenant_fk(),
        sa.Column('name', sa.String(120), nullable=False),
        sa.Column('subject', sa.String(255)),
        sa.Column('body', sa.Text()),
        *_timestamps(),
    )
    op.create_table(
        'activity_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        _tenant_fk(),
        sa.Column('actor_id', sa.Integer()),
        sa.Column('action', sa.String(80), nullable=False),
        sa.Column('entity_type', sa.String(50)),
        sa.Column('entity_id', sa.String(64)),
        sa.Column('meta', sa.JSON()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_table(
        'scoring_events',
        sa.Column('id', sa.Integer(), primary_key=True),
        _tenant_fk(),
        sa.Column('application_id', sa.Integer(), sa.ForeignKey('applications.id'), nullable=False, index=True),
        sa.Column('job_id', sa.Integer(), sa.ForeignKey('jobs.id'), nullable=False),
        sa.Column('engine', sa.String(50), nullable=False),
        sa.Column('engine_version', sa.String(20)),
        sa.Column('mode', sa.String(20)),
        sa.Column('score', sa.Integer(), nullable=False),
        sa.Column('tier', sa.String(1), nullable=False),
        sa.Column('reason', sa.Text()),
        sa.Column('interview_focus', sa.JSON()),
        sa.Column('config_snapshot', sa.JSON()),
        sa.Column('input_summary', sa.JSON()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )


def downgrade() -> None:
    for name in ('scoring_events', 'activity_logs', 'email_templates', 'tags', 'notes',
                 'interviews', 'applications', 'candidates', 'jobs',
                 'tenant_memberships', 'users', 'tenants'):
        op.drop_table(name)
