"""
Test Configuration and Fixtures

This module provides:
- Environment setup before any application module reads settings
- Unit of work factories for both storage backends (in-memory and SQLite)
- Reservation coordinator wired with a recording notifier
- Shared users and event builders

Architecture:
- Unit tests (test/**/unit/): mocks only, no storage
- Integration tests: `uow_factory` is parametrized over the memory and sqlite backends
- API tests: full app through httpx ASGITransport with the container overridden
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read at import time (src.platform.config.core_setting.settings)
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['STORAGE_BACKEND'] = 'memory'
    os.environ['NOTIFICATION_BACKEND'] = 'log'
    os.environ['DB_CREATE_TABLES_ON_STARTUP'] = 'false'
    os.environ['MIN_TICKETS_PER_BOOKING'] = '1'
    os.environ['MAX_TICKETS_PER_BOOKING'] = '10'


# Call immediately to set env vars before any imports
_early_setup_test_environment()

from collections.abc import AsyncIterator, Awaitable, Callable  # noqa: E402
from contextlib import asynccontextmanager  # noqa: E402
from datetime import datetime, timedelta, timezone  # noqa: E402
from typing import Optional  # noqa: E402

import pytest  # noqa: E402

from src.platform.database.orm_db_setting import Database  # noqa: E402
from src.platform.database.unit_of_work import (  # noqa: E402
    AbstractUnitOfWork,
    InMemoryUnitOfWork,
    SqlAlchemyUnitOfWork,
)
from src.platform.metrics.booking_metrics import metrics  # noqa: E402
from src.service.booking.app.command.reservation_coordinator import (  # noqa: E402
    ReservationCoordinator,
)
from src.service.booking.domain.entity.event_entity import Event  # noqa: E402
from src.service.booking.domain.entity.seat_entity import Seat  # noqa: E402
from src.service.booking.domain.entity.user_entity import CurrentUser, UserRole  # noqa: E402
from src.service.booking.domain.seat_layout_domain import iter_layout_seats  # noqa: E402
from src.service.booking.domain.value_object.seat_layout import SeatLayout  # noqa: E402
from src.service.booking.driven_adapter.memory.in_memory_state import InMemoryState  # noqa: E402
from src.service.booking.driven_adapter.notification.logging_booking_notifier_impl import (  # noqa: E402
    LoggingBookingNotifierImpl,
)
from test.test_constants import (  # noqa: E402
    ADMIN_EMAIL,
    ADMIN_ID,
    ADMIN_NAME,
    ANOTHER_BUYER_EMAIL,
    ANOTHER_BUYER_ID,
    ANOTHER_BUYER_NAME,
    BUYER_EMAIL,
    BUYER_ID,
    BUYER_NAME,
    DEFAULT_EVENT_LOCATION,
    DEFAULT_EVENT_NAME,
)


UowFactory = Callable[[], AbstractUnitOfWork]


# =============================================================================
# Storage backends
# =============================================================================


@asynccontextmanager
async def _sqlite_database(tmp_path: Path) -> AsyncIterator[Database]:
    """File-backed SQLite so every unit of work gets its own connection"""
    database = Database(db_url=f'sqlite+aiosqlite:///{tmp_path / "booking.db"}')
    await database.create_tables()
    try:
        yield database
    finally:
        await database.dispose()


@pytest.fixture
def memory_uow_factory() -> UowFactory:
    state = InMemoryState()
    return lambda: InMemoryUnitOfWork(state)


@pytest.fixture
async def sqlite_database(tmp_path: Path) -> AsyncIterator[Database]:
    async with _sqlite_database(tmp_path) as database:
        yield database


@pytest.fixture
def sqlite_uow_factory(sqlite_database: Database) -> UowFactory:
    return lambda: SqlAlchemyUnitOfWork(sqlite_database.session_maker)


@pytest.fixture(params=['memory', 'sqlite'])
async def uow_factory(
    request: pytest.FixtureRequest, tmp_path: Path
) -> AsyncIterator[UowFactory]:
    """Runs the test once per storage backend"""
    if request.param == 'memory':
        state = InMemoryState()
        yield lambda: InMemoryUnitOfWork(state)
        return

    async with _sqlite_database(tmp_path) as database:
        yield lambda: SqlAlchemyUnitOfWork(database.session_maker)


# =============================================================================
# Coordinator
# =============================================================================


@pytest.fixture
def notifier() -> LoggingBookingNotifierImpl:
    return LoggingBookingNotifierImpl(sender='test@eventify.com')


@pytest.fixture
def coordinator(
    uow_factory: UowFactory, notifier: LoggingBookingNotifierImpl
) -> ReservationCoordinator:
    return ReservationCoordinator(
        uow_factory=uow_factory, notifier=notifier, booking_metrics=metrics
    )


# =============================================================================
# Users
# =============================================================================


@pytest.fixture
def buyer() -> CurrentUser:
    return CurrentUser(id=BUYER_ID, name=BUYER_NAME, email=BUYER_EMAIL)


@pytest.fixture
def another_buyer() -> CurrentUser:
    return CurrentUser(id=ANOTHER_BUYER_ID, name=ANOTHER_BUYER_NAME, email=ANOTHER_BUYER_EMAIL)


@pytest.fixture
def admin() -> CurrentUser:
    return CurrentUser(id=ADMIN_ID, name=ADMIN_NAME, email=ADMIN_EMAIL, role=UserRole.ADMIN)


# =============================================================================
# Event builders (bypass the future-date rule so past events can be stored)
# =============================================================================


EventBuilder = Callable[..., Awaitable[Event]]


@pytest.fixture
def make_event(uow_factory: UowFactory) -> EventBuilder:
    async def _make_event(
        *,
        total_seats: int = 10,
        price: int = 100,
        days_from_now: float = 30,
        seat_layout: Optional[SeatLayout] = None,
        name: str = DEFAULT_EVENT_NAME,
    ) -> Event:
        event = Event.create(
            name=name,
            date=datetime.now(timezone.utc) + timedelta(days=days_from_now),
            location=DEFAULT_EVENT_LOCATION,
            total_seats=seat_layout.capacity if seat_layout else total_seats,
            price=price,
            seat_layout=seat_layout,
        )
        async with uow_factory() as uow:
            event = await uow.event_command_repo.create(event=event)
            if seat_layout is not None:
                await uow.seat_command_repo.create_batch(
                    seats=list(
                        iter_layout_seats(event_id=event.id, base_price=price, layout=seat_layout)
                    )
                )
            await uow.commit()
        return event

    return _make_event


@pytest.fixture
def list_event_seats(uow_factory: UowFactory) -> Callable[[int], Awaitable[list[Seat]]]:
    async def _list(event_id: int) -> list[Seat]:
        async with uow_factory() as uow:
            return await uow.seat_query_repo.list_by_event(event_id=event_id)

    return _list


@pytest.fixture
def load_event(uow_factory: UowFactory) -> Callable[[int], Awaitable[Optional[Event]]]:
    async def _load(event_id: int) -> Optional[Event]:
        async with uow_factory() as uow:
            return await uow.event_query_repo.get_by_id(event_id=event_id)

    return _load
