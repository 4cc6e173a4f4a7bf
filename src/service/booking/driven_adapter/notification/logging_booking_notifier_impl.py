"""Logging notifier: writes each notification to the log and keeps the latest ones in memory."""

from collections import deque
from datetime import datetime, timezone

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_booking_notifier import IBookingNotifier
from src.service.booking.domain.domain_event.booking_notification import (
    BookingNotification,
    NotificationKind,
)


def render_body(notification: BookingNotification) -> str:
    seats = ', '.join(notification.seats) if notification.seats else 'General admission'
    if notification.kind == NotificationKind.BOOKING_CONFIRMED:
        opening = 'Your booking has been confirmed!'
    else:
        opening = 'Your booking has been cancelled. The tickets have been released.'

    return f"""
    Dear {notification.user_name},

    {opening}

    Booking Details:
    ----------------
    Booking ID: {notification.booking_id}
    Event: {notification.event_name}
    Date: {notification.event_date.strftime('%Y-%m-%d %H:%M')} UTC
    Location: {notification.event_location}
    Tickets: {notification.tickets}
    Seats: {seats}
    Total: ${notification.total_amount}
    """.strip()


class LoggingBookingNotifierImpl(IBookingNotifier):
    def __init__(self, *, sender: str = 'noreply@eventify.com', history_size: int = 1000):
        self.sender = sender
        # Most recent messages only; older ones are dropped
        self.sent_notifications: deque[dict] = deque(maxlen=history_size)

    @Logger.io
    async def notify(self, notification: BookingNotification) -> None:
        message = {
            'from': self.sender,
            'to': notification.user_email,
            'subject': notification.subject,
            'body': render_body(notification),
            'notification': notification,
            'sent_at': datetime.now(timezone.utc),
        }
        self.sent_notifications.append(message)

        Logger.base.info(
            f'📧 [NOTIFY] {notification.kind} -> {notification.user_email} '
            f'(booking {notification.booking_id})'
        )
