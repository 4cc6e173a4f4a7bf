"""init_db_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Schema:
- event: Events with capacity counters and optional seat layout
- seat: Per-event seats, unique by (event_id, row, seat_number)
- booking: Booking ledger with UUID7 primary key
- booking_seat: Seats held by each booking
- uq_booking_active_user_event: at most one Confirmed booking per (user_id, event_id)

Note: seat_layout uses the format:
  {"rows": 8, "seats_per_row": 10, "sections": [{"name": "VIP", "rows": ["A", "B"], "price_multiplier": 1.5}]}
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables with final schema."""

    # Event table
    op.create_table(
        'event',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('location', sa.String(length=200), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=True),
        sa.Column('total_seats', sa.Integer(), nullable=False),
        sa.Column('available_seats', sa.Integer(), nullable=False),
        sa.Column('price', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('seat_layout', sa.JSON(), nullable=True),
        sa.Column('has_seat_selection', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False
        ),
        sa.Column(
            'updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False
        ),
        sa.CheckConstraint('total_seats >= 1', name='ck_event_total_seats_positive'),
        sa.CheckConstraint(
            'available_seats >= 0 AND available_seats <= total_seats',
            name='ck_event_available_seats_range',
        ),
        sa.CheckConstraint('price >= 0', name='ck_event_price_non_negative'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_event_date'), 'event', ['date'])

    # Seat table
    op.create_table(
        'seat',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('seat_number', sa.Integer(), nullable=False),
        sa.Column('row', sa.String(length=5), nullable=False),
        sa.Column('section', sa.String(length=50), nullable=False, server_default='General'),
        sa.Column('price', sa.Integer(), nullable=False),
        sa.Column('seat_type', sa.String(length=20), nullable=False, server_default='regular'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='available'),
        sa.ForeignKeyConstraint(['event_id'], ['event.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('event_id', 'row', 'seat_number', name='uq_seat_event_row_number'),
        sa.CheckConstraint('price >= 0', name='ck_seat_price_non_negative'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_seat_event_id'), 'seat', ['event_id'])

    # Booking table
    op.create_table(
        'booking',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('user_name', sa.String(length=100), nullable=False),
        sa.Column('user_email', sa.String(length=255), nullable=False),
        sa.Column('tickets', sa.Integer(), nullable=False),
        sa.Column('total_amount', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='Confirmed'),
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False
        ),
        sa.Column(
            'updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_booking_user_id'), 'booking', ['user_id'])
    op.create_index(op.f('ix_booking_event_id'), 'booking', ['event_id'])
    op.create_index(
        'uq_booking_active_user_event',
        'booking',
        ['user_id', 'event_id'],
        unique=True,
        postgresql_where=sa.text("status = 'Confirmed'"),
    )

    # Booking -> seat association
    op.create_table(
        'booking_seat',
        sa.Column('booking_id', sa.Uuid(), nullable=False),
        sa.Column('seat_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['booking_id'], ['booking.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('booking_id', 'seat_id'),
    )
    op.create_index(op.f('ix_booking_seat_seat_id'), 'booking_seat', ['seat_id'])


def downgrade() -> None:
    op.drop_index(op.f('ix_booking_seat_seat_id'), table_name='booking_seat')
    op.drop_table('booking_seat')
    op.drop_index('uq_booking_active_user_event', table_name='booking')
    op.drop_index(op.f('ix_booking_event_id'), table_name='booking')
    op.drop_index(op.f('ix_booking_user_id'), table_name='booking')
    op.drop_table('booking')
    op.drop_index(op.f('ix_seat_event_id'), table_name='seat')
    op.drop_table('seat')
    op.drop_index(op.f('ix_event_date'), table_name='event')
    op.drop_table('event')
