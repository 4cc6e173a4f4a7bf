"""Tests for the common endpoints and exception handlers registered by the app factory."""

from fastapi import FastAPI
import httpx
import pytest

from src.platform.exception.exception_handlers import register_exception_handlers
from src.platform.exception.exceptions import InsufficientCapacityError, SeatConflictError
from test.test_main import app


def _error_app() -> FastAPI:
    error_app = FastAPI()
    register_exception_handlers(error_app)

    @error_app.get('/capacity')
    async def capacity() -> None:
        raise InsufficientCapacityError(requested=4, available_seats=1)

    @error_app.get('/seats')
    async def seats() -> None:
        raise SeatConflictError([9, 3])

    @error_app.get('/value')
    async def value() -> None:
        raise ValueError('bad value')

    @error_app.get('/boom')
    async def boom() -> None:
        raise RuntimeError('unexpected')

    return error_app


@pytest.fixture
async def plain_client():
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url='http://test') as http:
        yield http


@pytest.fixture
async def error_client():
    transport = httpx.ASGITransport(app=_error_app(), raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url='http://test') as http:
        yield http


class TestCommonEndpoints:
    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_health(self, plain_client) -> None:
        response = await plain_client.get('/health')

        assert response.status_code == 200
        assert response.json()['status'] == 'healthy'
        assert response.json()['storage_backend'] == 'memory'
        assert response.json()['notification_backend'] == 'log'

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_metrics_exposes_booking_counters(self, plain_client) -> None:
        response = await plain_client.get('/metrics')

        assert response.status_code == 200
        assert 'booking_requests_total' in response.text

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_request_latency_is_labelled_by_route_template(self, plain_client) -> None:
        await plain_client.get('/health')

        response = await plain_client.get('/metrics')

        assert 'http_request_duration_seconds_count' in response.text
        assert 'route="/health"' in response.text

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_root_redirects_to_docs(self, plain_client) -> None:
        response = await plain_client.get('/')

        assert response.status_code == 307
        assert response.headers['location'] == '/docs'


class TestExceptionHandlers:
    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_conflict_extras_are_rendered(self, error_client) -> None:
        capacity = await error_client.get('/capacity')
        seats = await error_client.get('/seats')

        assert capacity.status_code == 409
        assert capacity.json()['available_seats'] == 1
        assert seats.json() == {
            'detail': 'Some seats are not available or do not exist',
            'code': 'SEAT_CONFLICT',
            'seat_ids': [3, 9],
        }

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_value_error_is_bad_request(self, error_client) -> None:
        response = await error_client.get('/value')

        assert response.status_code == 400
        assert response.json() == {'detail': 'bad value', 'code': 'VALIDATION_ERROR'}

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_unhandled_error_hides_details(self, error_client) -> None:
        response = await error_client.get('/boom')

        assert response.status_code == 500
        assert response.json() == {'detail': 'Internal server error', 'code': 'INTERNAL_ERROR'}
