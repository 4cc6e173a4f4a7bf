#!/usr/bin/env python3
"""
Database Seed Script
Populate sample events into the configured storage backend

Features:
1. Create a general admission event (ticket counter only)
2. Create a seat selection event from a sectioned layout (VIP / Premium / General)

Notes:
- Run `python script/reset_database.py` first for a clean PostgreSQL schema
- Seats are generated from the layout; total_seats becomes the seat count
"""

import asyncio
from datetime import datetime, timedelta, timezone

from src.platform.config.di import container
from src.service.booking.app.command.create_event_use_case import CreateEventUseCase
from src.service.booking.domain.value_object.seat_layout import SeatLayout, SeatSection


SEAT_LAYOUT = SeatLayout(
    rows=8,
    seats_per_row=10,
    sections=[
        SeatSection(name='VIP', rows=['A', 'B'], price_multiplier=1.5),
        SeatSection(name='Premium', rows=['C', 'D', 'E'], price_multiplier=1.2),
        SeatSection(name='General', rows=['F', 'G', 'H'], price_multiplier=1.0),
    ],
)


async def create_events() -> None:
    use_case = CreateEventUseCase(uow_factory=container.unit_of_work)
    starts_at = datetime.now(timezone.utc) + timedelta(days=30)

    print('🎫 Creating general admission event...')
    event = await use_case.create(
        name='Open Air Festival',
        date=starts_at,
        location='Riverside Park',
        description='General admission, no assigned seats',
        total_seats=500,
        price=1200,
    )
    print(f'   ✅ Created event: ID={event.id}, Seats={event.total_seats}')

    print('💺 Creating seat selection event...')
    event = await use_case.create(
        name='Symphony Night',
        date=starts_at + timedelta(days=7),
        location='Concert Hall',
        description='Reserved seating across VIP, Premium and General sections',
        total_seats=SEAT_LAYOUT.capacity,
        price=2000,
        seat_layout=SEAT_LAYOUT,
    )
    print(f'   ✅ Created event: ID={event.id}, Seats={event.total_seats}')


async def main():
    print('🌱 Starting data seeding...')
    print('=' * 50)

    settings = container.config_service()
    database = container.database()
    try:
        if settings.STORAGE_BACKEND == 'sqlalchemy' and settings.DB_CREATE_TABLES_ON_STARTUP:
            await database.create_tables()
        await create_events()
        print('=' * 50)
        print('✅ Seeding completed!')
    except Exception as e:
        print(f'❌ Seeding failed: {e}')
        exit(1)
    finally:
        await database.dispose()


if __name__ == '__main__':
    asyncio.run(main())
