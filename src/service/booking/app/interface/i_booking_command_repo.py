from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.service.booking.domain.entity.booking_entity import Booking


class IBookingCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        """
        Insert a Confirmed booking

        Raises:
            DuplicateBookingError: When the user already holds a Confirmed booking for the event
        """
        pass

    @abstractmethod
    async def cancel(self, *, booking_id: UUID, user_id: int) -> Optional[Booking]:
        """
        Flip a Confirmed booking to Cancelled (WHERE status = 'Confirmed')

        Returns:
            The cancelled booking, or None when no Confirmed booking matched
        """
        pass
