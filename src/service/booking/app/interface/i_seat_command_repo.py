from abc import ABC, abstractmethod
from typing import List

from src.service.booking.domain.entity.seat_entity import Seat


class ISeatCommandRepo(ABC):
    """Seat Command Repository Interface - CQRS Write Side"""

    @abstractmethod
    async def create_batch(self, *, seats: List[Seat]) -> List[Seat]:
        """
        Bulk insert seats

        Raises:
            ValidationError: When a (row, seat_number) pair already exists for the event
        """
        pass

    @abstractmethod
    async def reserve(self, *, event_id: int, seat_ids: List[int]) -> List[Seat]:
        """
        Flip available seats of the event to booked in one conditional update

        Returns:
            Only the seats that were actually transitioned
        """
        pass

    @abstractmethod
    async def release(self, *, seat_ids: List[int]) -> int:
        """Set booked seats back to available; already available seats are left alone"""
        pass

    @abstractmethod
    async def delete_by_event(self, *, event_id: int) -> int:
        pass
