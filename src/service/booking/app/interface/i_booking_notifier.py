from abc import ABC, abstractmethod

from src.service.booking.domain.domain_event.booking_notification import BookingNotification


class IBookingNotifier(ABC):
    """Delivers booking notifications after commit; failures never affect the booking"""

    @abstractmethod
    async def notify(self, notification: BookingNotification) -> None:
        pass
