from collections.abc import AsyncIterator

from dependency_injector import providers
import httpx
import pytest

from src.platform.config.di import container
from src.service.booking.driven_adapter.memory.in_memory_state import InMemoryState
from src.service.booking.driven_adapter.notification.logging_booking_notifier_impl import (
    LoggingBookingNotifierImpl,
)
from test.test_constants import (
    ADMIN_EMAIL,
    ADMIN_ID,
    ADMIN_NAME,
    ANOTHER_BUYER_EMAIL,
    ANOTHER_BUYER_ID,
    ANOTHER_BUYER_NAME,
    BUYER_EMAIL,
    BUYER_ID,
    BUYER_NAME,
)
from test.test_main import app


@pytest.fixture
def api_notifier() -> LoggingBookingNotifierImpl:
    return LoggingBookingNotifierImpl(sender='api-test@eventify.com')


@pytest.fixture
async def client(api_notifier: LoggingBookingNotifierImpl) -> AsyncIterator[httpx.AsyncClient]:
    """Fresh in-memory store per test; lifespan wires the container"""
    with (
        container.in_memory_state.override(providers.Object(InMemoryState())),
        container.booking_notifier.override(providers.Object(api_notifier)),
    ):
        async with app.router.lifespan_context(app):
            transport = httpx.ASGITransport(app=app)
            async with httpx.AsyncClient(transport=transport, base_url='http://test') as http:
                yield http


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {
        'X-User-Id': str(ADMIN_ID),
        'X-User-Name': ADMIN_NAME,
        'X-User-Email': ADMIN_EMAIL,
        'X-User-Role': 'admin',
    }


@pytest.fixture
def buyer_headers() -> dict[str, str]:
    return {'X-User-Id': str(BUYER_ID), 'X-User-Name': BUYER_NAME, 'X-User-Email': BUYER_EMAIL}


@pytest.fixture
def another_buyer_headers() -> dict[str, str]:
    return {
        'X-User-Id': str(ANOTHER_BUYER_ID),
        'X-User-Name': ANOTHER_BUYER_NAME,
        'X-User-Email': ANOTHER_BUYER_EMAIL,
    }
