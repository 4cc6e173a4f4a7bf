from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.booking.domain.entity.seat_entity import Seat


class ISeatQueryRepo(ABC):
    """Repository interface for seat read operations"""

    @abstractmethod
    async def get_by_ids(self, *, seat_ids: List[int]) -> List[Seat]:
        pass

    @abstractmethod
    async def list_by_event(
        self, *, event_id: int, section: Optional[str] = None, row: Optional[str] = None
    ) -> List[Seat]:
        """Seats ordered by row then seat number"""
        pass

    @abstractmethod
    async def count_by_event(self, *, event_id: int) -> int:
        pass
