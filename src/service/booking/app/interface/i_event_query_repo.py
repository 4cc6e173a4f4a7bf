from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from src.service.booking.domain.entity.event_entity import Event


class IEventQueryRepo(ABC):
    """Repository interface for event read operations"""

    @abstractmethod
    async def get_by_id(self, *, event_id: int) -> Optional[Event]:
        pass

    @abstractmethod
    async def list_upcoming(self, *, now: datetime) -> List[Event]:
        """Events dated at or after now, ordered by date"""
        pass
