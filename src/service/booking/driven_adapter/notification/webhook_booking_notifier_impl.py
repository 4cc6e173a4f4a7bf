"""Webhook notifier: POSTs each notification as JSON to a delivery endpoint."""

from typing import Optional

import httpx
import orjson

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_booking_notifier import IBookingNotifier
from src.service.booking.domain.domain_event.booking_notification import BookingNotification


class WebhookBookingNotifierImpl(IBookingNotifier):
    def __init__(
        self,
        *,
        url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self._transport = transport

    @Logger.io
    async def notify(self, notification: BookingNotification) -> None:
        if not self.url:
            raise ValueError('NOTIFICATION_WEBHOOK_URL is not configured')

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(
                self.url,
                content=orjson.dumps(notification.to_payload()),
                headers={'Content-Type': 'application/json'},
            )
            response.raise_for_status()

        Logger.base.info(
            f'📨 [NOTIFY] Delivered {notification.kind} for booking {notification.booking_id}'
        )
