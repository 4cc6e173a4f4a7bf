from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.service.booking.domain.entity.booking_entity import Booking


class IBookingQueryRepo(ABC):
    """Repository interface for booking read operations"""

    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        pass

    @abstractmethod
    async def get_active(self, *, user_id: int, event_id: int) -> Optional[Booking]:
        """The user's Confirmed booking for the event, if any"""
        pass

    @abstractmethod
    async def list_by_user(self, *, user_id: int) -> List[Booking]:
        """All of the user's bookings, newest first"""
        pass

    @abstractmethod
    async def count_active_by_event(self, *, event_id: int) -> int:
        pass
