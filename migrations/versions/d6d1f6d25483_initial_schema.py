"""initial schema

Revision ID: d6d1f6d25483
Revises:
Create Date: 2026-02-07 17:40:12.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = 'd6d1f6d25483'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _uuid() -> postgresql.UUID:
    return postgresql.UUID(as_uuid=True)


def _timestamps(updated: bool = True) -> list[sa.Column]:
    columns = [sa.Column('created_at', sa.DateTime(timezone=True), nullable=False)]
    if updated:
        columns.append(sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False))
    return columns


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', _uuid(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('affiliation', sa.String(length=255), nullable=False),
        sa.Column('country', sa.String(length=100), nullable=False),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('expertise', sa.JSON(), nullable=False),
        sa.Column('participant_type', sa.String(length=32), nullable=False),
        sa.Column('role', sa.String(length=32), nullable=False),
        sa.Column('payment_status', sa.String(length=32), nullable=False),
        sa.Column('registration_fee', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('registration_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_users')),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_payment_status'), 'users', ['payment_status'], unique=False)

    op.create_table(
        'user_sessions',
        sa.Column('id', _uuid(), nullable=False),
        sa.Column('user_id', _uuid(), nullable=False),
        sa.Column('session_type', sa.String(length=32), nullable=False),
        *_timestamps(updated=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name=op.f('fk_user_sessions_user_id_users'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_user_sessions')),
        sa.UniqueConstraint('user_id', 'session_type', name='uq_user_sessions_user_session_type'),
    )
    op.create_index(op.f('ix_user_sessions_user_id'), 'user_sessions', ['user_id'], unique=False)

    op.create_table(
        'conferences',
        sa.Column('id', _uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('venue', sa.Text(), nullable=False),
        sa.Column('registration_deadline', sa.DateTime(timezone=True), nullable=False),
        sa.Column('submission_deadline', sa.DateTime(timezone=True), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_conferences')),
    )

    op.create_table(
        'sessions',
        sa.Column('id', _uuid(), nullable=False),
        sa.Column('conference_id', _uuid(), nullable=False),
        sa.Column('type', sa.String(length=32), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['conference_id'], ['conferences.id'], name=op.f('fk_sessions_conference_id_conferences'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_sessions')),
    )
    op.create_index(op.f('ix_sessions_conference_id'), 'sessions', ['conference_id'], unique=False)

    op.create_table(
        'session_schedules',
        sa.Column('id', _uuid(), nullable=False),
        sa.Column('session_id', _uuid(), nullable=False),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamps(updated=False),
        sa.ForeignKeyConstraint(['session_id'], ['sessions.id'], name=op.f('fk_session_schedules_session_id_sessions'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_session_schedules')),
    )
    op.create_index(op.f('ix_session_schedules_session_id'), 'session_schedules', ['session_id'], unique=False)

    op.create_table(
        'registration_fees',
        sa.Column('id', _uuid(), nullable=False),
        sa.Column('conference_id', _uuid(), nullable=False),
        sa.Column('participant_type', sa.String(length=32), nullable=False),
        sa.Column('early_bird_fee', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('regular_fee', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('late_fee', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('early_bird_deadline', sa.DateTime(timezone=True), nullable=False),
        sa.Column('late_registration_start', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(updated=False),
        sa.ForeignKeyConstraint(['conference_id'], ['conferences.id'], name=op.f('fk_registration_fees_conference_id_conferences'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_registration_fees')),
        sa.UniqueConstraint('conference_id', 'participant_type', name='uq_registration_fees_conference_participant'),
    )
    op.create_index(op.f('ix_registration_fees_conference_id'), 'registration_fees', ['conference_id'], unique=False)

    op.create_table(
        'payment_instructions',
        sa.Column('id', _uuid(), nullable=False),
        sa.Column('conference_id', _uuid(), nullable=False),
        sa.Column('bank_name', sa.String(length=255), nullable=False),
        sa.Column('account_name', sa.String(length=255), nullable=False),
        sa.Column('account_number', sa.String(length=100), nullable=False),
        sa.Column('swift_code', sa.String(length=20), nullable=True),
        sa.Column('routing_number', sa.String(length=20), nullable=True),
        sa.Column('accepted_methods', sa.JSON(), nullable=False),
        sa.Column('instructions', sa.Text(), nullable=False),
        sa.Column('support_contact', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['conference_id'], ['conferences.id'], name=op.f('fk_payment_instructions_conference_id_conferences'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_payment_instructions')),
        sa.UniqueConstraint('conference_id', name=op.f('uq_payment_instructions_conference_id')),
    )

    op.create_table(
        'submissions',
        sa.Column('id', _uuid(), nullable=False),
        sa.Column('user_id', _uuid(), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('abstract', sa.Text(), nullable=False),
        sa.Column('abstract_html', sa.Text(), nullable=True),
        sa.Column('keywords', sa.JSON(), nullable=False),
        sa.Column('session_type', sa.String(length=32), nullable=False),
        sa.Column('presentation_type', sa.String(length=32), nullable=False),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('submission_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('manuscript_path', sa.String(length=500), nullable=True),
        sa.Column('corresponding_author', sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name=op.f('fk_submissions_user_id_users'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_submissions')),
    )
    op.create_index(op.f('ix_submissions_user_id'), 'submissions', ['user_id'], unique=False)
    op.create_index(op.f('ix_submissions_session_type'), 'submissions', ['session_type'], unique=False)
    op.create_index(op.f('ix_submissions_status'), 'submissions', ['status'], unique=False)

    op.create_table(
        'authors',
        sa.Column('id', _uuid(), nullable=False),
        sa.Column('submission_id', _uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('affiliation', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('is_corresponding', sa.Boolean(), nullable=False),
        sa.Column('author_order', sa.Integer(), nullable=False),
        *_timestamps(updated=False),
        sa.ForeignKeyConstraint(['submission_id'], ['submissions.id'], name=op.f('fk_authors_submission_id_submissions'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_authors')),
    )
    op.create_index(op.f('ix_authors_submission_id'), 'authors', ['submission_id'], unique=False)

    op.create_table(
        'reviews',
        sa.Column('id', _uuid(), nullable=False),
        sa.Column('submission_id', _uuid(), nullable=False),
        sa.Column('reviewer_id', _uuid(), nullable=False),
        sa.Column('score', sa.Integer(), nullable=True),
        sa.Column('comments', sa.Text(), nullable=True),
        sa.Column('recommendation', sa.String(length=32), nullable=True),
        sa.Column('review_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('is_completed', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('score IS NULL OR (score >= 1 AND score <= 10)', name=op.f('ck_reviews_score_range')),
        sa.ForeignKeyConstraint(['reviewer_id'], ['users.id'], name=op.f('fk_reviews_reviewer_id_users'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['submission_id'], ['submissions.id'], name=op.f('fk_reviews_submission_id_submissions'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_reviews')),
        sa.UniqueConstraint('submission_id', 'reviewer_id', name='uq_reviews_submission_reviewer'),
    )
    op.create_index(op.f('ix_reviews_reviewer_id'), 'reviews', ['reviewer_id'], unique=False)
    op.create_index(op.f('ix_reviews_submission_id'), 'reviews', ['submission_id'], unique=False)

    op.create_table(
        'payment_records',
        sa.Column('id', _uuid(), nullable=False),
        sa.Column('user_id', _uuid(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('payment_method', sa.String(length=32), nullable=False),
        sa.Column('proof_of_payment_path', sa.String(length=500), nullable=True),
        sa.Column('transaction_reference', sa.String(length=255), nullable=True),
        sa.Column('payment_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('admin_notes', sa.Text(), nullable=True),
        sa.Column('verified_by', _uuid(), nullable=True),
        sa.Column('verification_date', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name=op.f('fk_payment_records_user_id_users'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['verified_by'], ['users.id'], name=op.f('fk_payment_records_verified_by_users')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_payment_records')),
    )
    op.create_index(op.f('ix_payment_records_user_id'), 'payment_records', ['user_id'], unique=False)
    op.create_index(op.f('ix_payment_records_status'), 'payment_records', ['status'], unique=False)


def downgrade() -> None:
    op.drop_table('payment_records')
    op.drop_table('reviews')
    op.drop_table('authors')
    op.drop_table('submissions')
    op.drop_table('payment_instructions')
    op.drop_table('registration_fees')
    op.drop_table('session_schedules')
    op.drop_table('sessions')
    op.drop_table('conferences')
    op.drop_table('user_sessions')
    op.drop_table('users')
