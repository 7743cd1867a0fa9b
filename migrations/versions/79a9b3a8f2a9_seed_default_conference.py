"""seed default conference

Revision ID: 79a9b3a8f2a9
Revises: d6d1f6d25483
Create Date: 2026-02-07 17:56:08.949342

"""
import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '79a9b3a8f2a9'
down_revision: Union[str, Sequence[str], None] = 'd6d1f6d25483'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CONFERENCE_NAME = 'International Academic Conference 2024'

EARLY_BIRD_DEADLINE = datetime(2024, 6, 15, 23, 59, 59, tzinfo=timezone.utc)
LATE_REGISTRATION_START = datetime(2024, 8, 1, tzinfo=timezone.utc)

SESSIONS = [
    ('CHE', 'Computational Chemistry', 'Advanced computational methods in chemistry research'),
    ('CSE', 'Computer Science & Engineering', 'High performance computing and engineering applications'),
    ('BIO', 'Computational Biology', 'Bioinformatics, biochemistry, and biophysics research'),
    ('MST', 'Mathematics & Statistics', 'Mathematical modeling and statistical analysis'),
    ('PFD', 'Computational Physics', 'Computational fluid dynamics and solid mechanics'),
]

# participant type -> (early bird, regular, late)
FEES = {
    'keynote_speaker': ('0.00', '0.00', '0.00'),
    'oral_presenter': ('150.00', '200.00', '250.00'),
    'poster_presenter': ('100.00', '150.00', '200.00'),
    'panelist': ('100.00', '150.00', '200.00'),
    'workshop_leader': ('50.00', '100.00', '150.00'),
    'regular_participant': ('200.00', '250.00', '300.00'),
    'observer': ('150.00', '200.00', '250.00'),
    'industry_representative': ('300.00', '400.00', '500.00'),
    'conference_chair': ('0.00', '0.00', '0.00'),
    'scientific_committee': ('0.00', '0.00', '0.00'),
    'organizing_committee': ('0.00', '0.00', '0.00'),
    'session_chair': ('50.00', '50.00', '50.00'),
    'reviewer': ('0.00', '0.00', '0.00'),
    'technical_support': ('0.00', '0.00', '0.00'),
    'volunteer': ('0.00', '0.00', '0.00'),
    'sponsor': ('0.00', '0.00', '0.00'),
    'government_representative': ('100.00', '150.00', '200.00'),
}

conferences = sa.table(
    'conferences',
    sa.column('id', postgresql.UUID(as_uuid=True)),
    sa.column('name', sa.String),
    sa.column('description', sa.Text),
    sa.column('start_date', sa.Date),
    sa.column('end_date', sa.Date),
    sa.column('venue', sa.Text),
    sa.column('registration_deadline', sa.DateTime(timezone=True)),
    sa.column('submission_deadline', sa.DateTime(timezone=True)),
    sa.column('is_active', sa.Boolean),
    sa.column('created_at', sa.DateTime(timezone=True)),
    sa.column('updated_at', sa.DateTime(timezone=True)),
)

sessions = sa.table(
    'sessions',
    sa.column('id', postgresql.UUID(as_uuid=True)),
    sa.column('conference_id', postgresql.UUID(as_uuid=True)),
    sa.column('type', sa.String),
    sa.column('name', sa.String),
    sa.column('description', sa.Text),
    sa.column('created_at', sa.DateTime(timezone=True)),
    sa.column('updated_at', sa.DateTime(timezone=True)),
)

registration_fees = sa.table(
    'registration_fees',
    sa.column('id', postgresql.UUID(as_uuid=True)),
    sa.column('conference_id', postgresql.UUID(as_uuid=True)),
    sa.column('participant_type', sa.String),
    sa.column('early_bird_fee', sa.Numeric(10, 2)),
    sa.column('regular_fee', sa.Numeric(10, 2)),
    sa.column('late_fee', sa.Numeric(10, 2)),
    sa.column('currency', sa.String),
    sa.column('early_bird_deadline', sa.DateTime(timezone=True)),
    sa.column('late_registration_start', sa.DateTime(timezone=True)),
    sa.column('created_at', sa.DateTime(timezone=True)),
)

payment_instructions = sa.table(
    'payment_instructions',
    sa.column('id', postgresql.UUID(as_uuid=True)),
    sa.column('conference_id', postgresql.UUID(as_uuid=True)),
    sa.column('bank_name', sa.String),
    sa.column('account_name', sa.String),
    sa.column('account_number', sa.String),
    sa.column('swift_code', sa.String),
    sa.column('routing_number', sa.String),
    sa.column('accepted_methods', sa.JSON),
    sa.column('instructions', sa.Text),
    sa.column('support_contact', sa.String),
    sa.column('created_at', sa.DateTime(timezone=True)),
    sa.column('updated_at', sa.DateTime(timezone=True)),
)


def upgrade() -> None:
    now = datetime.now(timezone.utc)
    conference_id = uuid.uuid4()

    op.bulk_insert(conferences, [{
        'id': conference_id,
        'name': CONFERENCE_NAME,
        'description': (
            'A comprehensive academic conference covering computational chemistry, '
            'computer science, biology, mathematics, and physics.'
        ),
        'start_date': date(2024, 9, 15),
        'end_date': date(2024, 9, 17),
        'venue': 'International Convention Center, Academic City',
        'registration_deadline': datetime(2024, 8, 15, 23, 59, 59, tzinfo=timezone.utc),
        'submission_deadline': datetime(2024, 7, 31, 23, 59, 59, tzinfo=timezone.utc),
        'is_active': True,
        'created_at': now,
        'updated_at': now,
    }])

    op.bulk_insert(sessions, [
        {
            'id': uuid.uuid4(),
            'conference_id': conference_id,
            'type': session_type,
            'name': name,
            'description': description,
            'created_at': now,
            'updated_at': now,
        }
        for session_type, name, description in SESSIONS
    ])

    op.bulk_insert(registration_fees, [
        {
            'id': uuid.uuid4(),
            'conference_id': conference_id,
            'participant_type': participant_type,
            'early_bird_fee': Decimal(early),
            'regular_fee': Decimal(regular),
            'late_fee': Decimal(late),
            'currency': 'USD',
            'early_bird_deadline': EARLY_BIRD_DEADLINE,
            'late_registration_start': LATE_REGISTRATION_START,
            'created_at': now,
        }
        for participant_type, (early, regular, late) in FEES.items()
    ])

    op.bulk_insert(payment_instructions, [{
        'id': uuid.uuid4(),
        'conference_id': conference_id,
        'bank_name': 'International Academic Bank',
        'account_name': 'Conference Registration Account',
        'account_number': '1234567890',
        'swift_code': 'IACBXXXX',
        'routing_number': '021000021',
        'accepted_methods': ['bank_transfer', 'credit_card'],
        'instructions': (
            'Please include your full name and registration ID in the payment reference. '
            'Upload proof of payment after completing the transfer.'
        ),
        'support_contact': 'registration@conference.example.org',
        'created_at': now,
        'updated_at': now,
    }])


def downgrade() -> None:
    # sessions, fees and instructions go with the conference (ON DELETE CASCADE)
    op.execute(conferences.delete().where(conferences.c.name == CONFERENCE_NAME))
