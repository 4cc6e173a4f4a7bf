"""
API tests for /api/event

Admin-only writes, public reads, seat map and the error response format.
"""

from datetime import datetime, timedelta, timezone

import httpx
import pytest


def _event_payload(**overrides) -> dict:
    payload = {
        'name': 'API Concert',
        'date': (datetime.now(timezone.utc) + timedelta(days=14)).isoformat(),
        'location': 'API Arena',
        'description': 'Created through the API',
        'total_seats': 50,
        'price': 120,
    }
    payload.update(overrides)
    return payload


LAYOUT_PAYLOAD = {
    'rows': 8,
    'seats_per_row': 10,
    'sections': [
        {'name': 'VIP', 'rows': ['A', 'B'], 'price_multiplier': 1.5},
        {'name': 'Premium', 'rows': ['C', 'D', 'E'], 'price_multiplier': 1.2},
        {'name': 'General', 'rows': ['F', 'G', 'H'], 'price_multiplier': 1.0},
    ],
}


class TestEventApiAuth:
    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_missing_identity_is_unauthenticated(self, client: httpx.AsyncClient) -> None:
        response = await client.post('/api/event', json=_event_payload())

        assert response.status_code == 401
        assert response.json()['code'] == 'UNAUTHENTICATED'

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_malformed_identity_is_unauthenticated(self, client: httpx.AsyncClient) -> None:
        response = await client.post(
            '/api/event', json=_event_payload(), headers={'X-User-Id': 'not-a-number'}
        )

        assert response.status_code == 401

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_regular_user_cannot_create(self, client, buyer_headers) -> None:
        response = await client.post('/api/event', json=_event_payload(), headers=buyer_headers)

        assert response.status_code == 403
        assert response.json() == {'detail': 'Admin access required', 'code': 'FORBIDDEN'}


class TestEventApi:
    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_create_get_and_list(self, client, admin_headers) -> None:
        created = await client.post('/api/event', json=_event_payload(), headers=admin_headers)

        assert created.status_code == 201
        body = created.json()
        assert body['total_seats'] == 50
        assert body['available_seats'] == 50
        assert body['has_seat_selection'] is False
        assert body['seat_layout'] is None

        fetched = await client.get(f'/api/event/{body["id"]}')
        assert fetched.status_code == 200
        assert fetched.json()['name'] == 'API Concert'

        listed = await client.get('/api/event')
        assert [event['id'] for event in listed.json()] == [body['id']]

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_create_with_layout_and_read_seat_map(self, client, admin_headers) -> None:
        created = await client.post(
            '/api/event',
            json=_event_payload(price=100, seat_layout=LAYOUT_PAYLOAD),
            headers=admin_headers,
        )
        event = created.json()

        assert created.status_code == 201
        assert event['total_seats'] == 80
        assert event['has_seat_selection'] is True
        assert event['seat_layout']['sections'][0]['name'] == 'VIP'

        seat_map = await client.get(f'/api/event/{event["id"]}/seats')
        rows = seat_map.json()['rows']
        assert [row['row'] for row in rows] == list('ABCDEFGH')
        assert rows[0]['section'] == 'VIP'
        assert rows[0]['available_count'] == 10
        assert rows[0]['seats'][0]['price'] == 150
        assert rows[0]['seats'][0]['seat_type'] == 'vip'

        vip_only = await client.get(
            f'/api/event/{event["id"]}/seats', params={'section': 'VIP', 'row': 'b'}
        )
        assert [row['row'] for row in vip_only.json()['rows']] == ['B']

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_past_date_is_a_validation_error(self, client, admin_headers) -> None:
        response = await client.post(
            '/api/event',
            json=_event_payload(date=(datetime.now(timezone.utc) - timedelta(days=1)).isoformat()),
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()['code'] == 'VALIDATION_ERROR'

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_malformed_body_is_a_validation_error(self, client, admin_headers) -> None:
        response = await client.post(
            '/api/event', json={'name': 'No date'}, headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()['code'] == 'VALIDATION_ERROR'

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_unknown_event_is_not_found(self, client) -> None:
        response = await client.get('/api/event/9999')

        assert response.status_code == 404
        assert response.json() == {'detail': 'Event not found', 'code': 'NOT_FOUND'}

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_update_and_delete(self, client, admin_headers) -> None:
        event = (
            await client.post('/api/event', json=_event_payload(), headers=admin_headers)
        ).json()

        updated = await client.patch(
            f'/api/event/{event["id"]}',
            json={'name': 'Renamed', 'total_seats': 60},
            headers=admin_headers,
        )
        assert updated.status_code == 200
        assert updated.json()['name'] == 'Renamed'
        assert updated.json()['available_seats'] == 60

        deleted = await client.delete(f'/api/event/{event["id"]}', headers=admin_headers)
        assert deleted.status_code == 204
        assert (await client.get(f'/api/event/{event["id"]}')).status_code == 404

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_add_seats_to_event(self, client, admin_headers) -> None:
        event = (
            await client.post('/api/event', json=_event_payload(total_seats=2), headers=admin_headers)
        ).json()

        response = await client.post(
            f'/api/event/{event["id"]}/seats',
            json={
                'seats': [
                    {'row': 'A', 'seat_number': 1, 'price': 200, 'section': 'VIP'},
                    {'row': 'A', 'seat_number': 2, 'price': 200, 'section': 'VIP'},
                ]
            },
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert [seat['seat_type'] for seat in response.json()] == ['vip', 'vip']
        fetched = await client.get(f'/api/event/{event["id"]}')
        assert fetched.json()['has_seat_selection'] is True
