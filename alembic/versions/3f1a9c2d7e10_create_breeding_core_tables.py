"""create_breeding_core_tables

Revision ID: 3f1a9c2d7e10
Revises:
Create Date: 2026-10-18 10:12:41.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f1a9c2d7e10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    """Create dogs, litters, puppies and events tables."""
    op.create_table(
        'dogs',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('call_name', sa.String(100), nullable=True),
        sa.Column('registration_number', sa.String(100), nullable=True),
        sa.Column('breed', sa.String(100), nullable=False),
        sa.Column('color', sa.String(100), nullable=True),
        sa.Column('sex', sa.String(10), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('birth_date', sa.Date(), nullable=False),
        sa.Column('sire_id', sa.Integer(), nullable=True),
        sa.Column('dam_id', sa.Integer(), nullable=True),
        sa.Column('photo_main_url', sa.String(500), nullable=True),
        sa.Column('titles', sa.JSON(), nullable=False),
        sa.Column('health_tests', sa.JSON(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_dogs_tenant_id', 'dogs', ['tenant_id'])
    op.create_index('ix_dogs_registration_number', 'dogs', ['registration_number'])
    op.create_index('ix_dogs_sire_id', 'dogs', ['sire_id'])
    op.create_index('ix_dogs_dam_id', 'dogs', ['dam_id'])
    op.create_index('ix_dogs_tenant_status', 'dogs', ['tenant_id', 'status'])
    op.create_index('ix_dogs_tenant_sex', 'dogs', ['tenant_id', 'sex'])

    op.create_table(
        'litters',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        sa.Column('dam_id', sa.Integer(), nullable=False),
        sa.Column('sire_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('litter_letter', sa.String(1), nullable=True),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('heat_start_date', sa.Date(), nullable=True),
        sa.Column('mating_date', sa.Date(), nullable=True),
        sa.Column('mating_type', sa.String(30), nullable=True),
        sa.Column('pregnancy_confirmed_date', sa.Date(), nullable=True),
        sa.Column('expected_birth_date', sa.Date(), nullable=True),
        sa.Column('actual_birth_date', sa.Date(), nullable=True),
        sa.Column('birth_type', sa.String(20), nullable=True),
        sa.Column('puppies_born_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('puppies_alive_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('males_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('females_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('version_id', sa.Integer(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_litters_tenant_id', 'litters', ['tenant_id'])
    op.create_index('ix_litters_dam_id', 'litters', ['dam_id'])
    op.create_index('ix_litters_sire_id', 'litters', ['sire_id'])
    op.create_index('ix_litters_expected_birth_date', 'litters', ['expected_birth_date'])
    op.create_index('ix_litters_actual_birth_date', 'litters', ['actual_birth_date'])
    op.create_index('ix_litters_tenant_status', 'litters', ['tenant_id', 'status'])

    op.create_table(
        'puppies',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        sa.Column('litter_id', sa.Integer(), sa.ForeignKey('litters.id', ondelete='CASCADE'), nullable=False),
        sa.Column('identifier', sa.String(50), nullable=False),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('sex', sa.String(10), nullable=False),
        sa.Column('color', sa.String(100), nullable=True),
        sa.Column('markings', sa.String(255), nullable=True),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('birth_order', sa.Integer(), nullable=False),
        sa.Column('birth_weight', sa.Numeric(8, 2), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('litter_id', 'identifier', name='uq_puppies_litter_identifier'),
    )
    op.create_index('ix_puppies_tenant_id', 'puppies', ['tenant_id'])
    op.create_index('ix_puppies_litter_id', 'puppies', ['litter_id'])

    op.create_table(
        'events',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        sa.Column('entity_type', sa.String(10), nullable=False),
        sa.Column('entity_id', sa.Integer(), nullable=False),
        sa.Column('event_type', sa.String(50), nullable=False),
        sa.Column('event_date', sa.DateTime(), nullable=False),
        sa.Column('event_end_date', sa.DateTime(), nullable=True),
        sa.Column('payload', sa.JSON(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('reminder_date', sa.DateTime(), nullable=True),
        sa.Column('reminder_completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_by', sa.Integer(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_events_tenant_id', 'events', ['tenant_id'])
    op.create_index('ix_events_event_type', 'events', ['event_type'])
    op.create_index('ix_events_event_date', 'events', ['event_date'])
    op.create_index('ix_events_tenant_entity', 'events', ['tenant_id', 'entity_type', 'entity_id'])
    op.create_index('ix_events_reminder', 'events', ['reminder_date', 'reminder_completed'])


def downgrade() -> None:
    """Drop the breeding core tables."""
    op.drop_table('events')
    op.drop_table('puppies')
    op.drop_table('litters')
    op.drop_table('dogs')
