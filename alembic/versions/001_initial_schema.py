"""Initial schema: user, safety_profile, trip, itinerary, itinerary_day, activity, safety_report, safety_section

Revision ID: 001
Revises:
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ENUMS = {
    'trip_status': ('DRAFT', 'PLANNED', 'IN_PROGRESS', 'COMPLETED', 'CANCELLED'),
    'activity_category': (
        'DINING', 'SIGHTSEEING', 'ADVENTURE', 'CULTURAL',
        'ENTERTAINMENT', 'SHOPPING', 'RELAXATION', 'NIGHTLIFE',
    ),
    'safety_level': ('LOW', 'MODERATE', 'HIGH', 'CRITICAL'),
    'budget_level': ('budget', 'moderate', 'luxury'),
    'travel_style': ('adventurous', 'relaxed', 'cultural', 'mixed'),
}


def upgrade() -> None:
    """Create all tables with their unique constraints and indexes."""

    # Get the database dialect to handle PostgreSQL vs SQLite differences
    bind = op.get_bind()
    is_postgresql = bind.dialect.name == 'postgresql'

    if is_postgresql:
        # Shared enum types are created once, up front
        for name, values in ENUMS.items():
            postgresql.ENUM(*values, name=name).create(bind, checkfirst=True)
        json_type = postgresql.JSONB()

        def enum(name: str) -> sa.types.TypeEngine:
            return postgresql.ENUM(*ENUMS[name], name=name, create_type=False)
    else:
        json_type = sa.JSON()

        def enum(name: str) -> sa.types.TypeEngine:
            return sa.Enum(*ENUMS[name], name=name)

    uuid_type = sa.Uuid()

    # Create user table
    op.create_table(
        'user',
        sa.Column('user_id', uuid_type, primary_key=True),
        sa.Column('email', sa.Text(), nullable=False),
        sa.Column('password_hash', sa.Text(), nullable=False),
        sa.Column('first_name', sa.Text(), nullable=True),
        sa.Column('last_name', sa.Text(), nullable=True),
        sa.Column('phone', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('email'),
    )
    op.create_index('idx_user_email', 'user', ['email'])

    # Create safety_profile table
    op.create_table(
        'safety_profile',
        sa.Column('profile_id', uuid_type, primary_key=True),
        sa.Column('user_id', uuid_type, nullable=False),
        sa.Column('is_lgbtq', sa.Boolean(), nullable=False),
        sa.Column('is_solo_female', sa.Boolean(), nullable=False),
        sa.Column('has_accessibility_needs', sa.Boolean(), nullable=False),
        sa.Column('religious_minority', sa.Boolean(), nullable=False),
        sa.Column('dietary_restrictions', json_type, nullable=False),
        sa.Column('language_barriers', json_type, nullable=False),
        sa.Column('preferred_budget_level', enum('budget_level'), nullable=True),
        sa.Column('travel_style', enum('travel_style'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.user_id'], ondelete='CASCADE'),
        sa.UniqueConstraint('user_id', name='uq_safety_profile_user'),
    )

    # Create trip table
    op.create_table(
        'trip',
        sa.Column('trip_id', uuid_type, primary_key=True),
        sa.Column('user_id', uuid_type, nullable=False),
        sa.Column('destination', sa.Text(), nullable=False),
        sa.Column('country', sa.Text(), nullable=False),
        sa.Column('city', sa.Text(), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('budget', sa.Float(), nullable=False),
        sa.Column('currency', sa.String(3), nullable=False),
        sa.Column('number_of_travelers', sa.Integer(), nullable=False),
        sa.Column('status', enum('trip_status'), nullable=False),
        sa.Column('hotel_suggestions', json_type, nullable=True),
        sa.Column('flight_suggestions', json_type, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.user_id'], ondelete='CASCADE'),
    )
    op.create_index('idx_trip_user_created', 'trip', ['user_id', 'created_at'])

    # Create itinerary table (one per trip)
    op.create_table(
        'itinerary',
        sa.Column('itinerary_id', uuid_type, primary_key=True),
        sa.Column('trip_id', uuid_type, nullable=False),
        sa.Column('ai_model', sa.Text(), nullable=True),
        sa.Column('generated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['trip_id'], ['trip.trip_id'], ondelete='CASCADE'),
        sa.UniqueConstraint('trip_id', name='uq_itinerary_trip'),
    )

    # Create itinerary_day table
    op.create_table(
        'itinerary_day',
        sa.Column('day_id', uuid_type, primary_key=True),
        sa.Column('itinerary_id', uuid_type, nullable=False),
        sa.Column('day_number', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('theme', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(
            ['itinerary_id'], ['itinerary.itinerary_id'], ondelete='CASCADE'
        ),
        sa.UniqueConstraint('itinerary_id', 'day_number', name='uq_itinerary_day_number'),
    )

    # Create activity table
    op.create_table(
        'activity',
        sa.Column('activity_id', uuid_type, primary_key=True),
        sa.Column('day_id', uuid_type, nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category', enum('activity_category'), nullable=False),
        sa.Column('location', sa.Text(), nullable=False),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('start_time', sa.Text(), nullable=True),
        sa.Column('duration', sa.Integer(), nullable=True),
        sa.Column('estimated_cost', sa.Float(), nullable=True),
        sa.Column('currency', sa.String(3), nullable=False),
        sa.Column('safety_notes', sa.Text(), nullable=True),
        sa.Column('requires_booking', sa.Boolean(), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['day_id'], ['itinerary_day.day_id'], ondelete='CASCADE'),
        sa.UniqueConstraint('day_id', 'order', name='uq_activity_day_order'),
    )

    # Create safety_report table (one per trip)
    op.create_table(
        'safety_report',
        sa.Column('report_id', uuid_type, primary_key=True),
        sa.Column('trip_id', uuid_type, nullable=False),
        sa.Column('overall_level', enum('safety_level'), nullable=False),
        sa.Column('summary', sa.Text(), nullable=False),
        sa.Column('ai_model', sa.Text(), nullable=True),
        sa.Column('generated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['trip_id'], ['trip.trip_id'], ondelete='CASCADE'),
        sa.UniqueConstraint('trip_id', name='uq_safety_report_trip'),
    )

    # Create safety_section table
    op.create_table(
        'safety_section',
        sa.Column('section_id', uuid_type, primary_key=True),
        sa.Column('report_id', uuid_type, nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('level', enum('safety_level'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('tips', json_type, nullable=False),
        sa.Column('resources', json_type, nullable=False),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ['report_id'], ['safety_report.report_id'], ondelete='CASCADE'
        ),
        sa.UniqueConstraint('report_id', 'order', name='uq_safety_section_order'),
    )


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""

    op.drop_table('safety_section')
    op.drop_table('safety_report')
    op.drop_table('activity')
    op.drop_table('itinerary_day')
    op.drop_table('itinerary')
    op.drop_index('idx_trip_user_created', table_name='trip')
    op.drop_table('trip')
    op.drop_table('safety_profile')
    op.drop_index('idx_user_email', table_name='user')
    op.drop_table('user')

    bind = op.get_bind()
    if bind.dialect.name == 'postgresql':
        for name in ENUMS:
            postgresql.ENUM(name=name).drop(bind, checkfirst=True)
