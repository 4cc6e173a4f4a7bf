"""
Event Command Repository Interface - CQRS Write Side

Capacity counters are only ever changed through conditional updates here;
callers never read-modify-write `available_seats`.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.service.booking.domain.entity.event_entity import Event


class IEventCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, event: Event) -> Event:
        pass

    @abstractmethod
    async def update_details(self, *, event: Event) -> Event:
        """Persist name, date, location, description and price (never the counters)"""
        pass

    @abstractmethod
    async def delete(self, *, event_id: int) -> bool:
        """
        Delete the event only while no tickets are held (available_seats == total_seats)

        Returns:
            False when the event is missing or a booking holds tickets
        """
        pass

    @abstractmethod
    async def reserve_tickets(self, *, event_id: int, count: int) -> Optional[int]:
        """
        Decrement available_seats by count only if enough remain

        Returns:
            New available_seats, or None when the condition did not match
        """
        pass

    @abstractmethod
    async def release_tickets(self, *, event_id: int, count: int) -> Optional[int]:
        """
        Increment available_seats by count, clamped to total_seats

        Returns:
            New available_seats, or None when the event does not exist
        """
        pass

    @abstractmethod
    async def resize(self, *, event_id: int, delta: int) -> Optional[Event]:
        """
        Shift total_seats and available_seats by delta, refusing to drop
        available_seats below zero or total_seats below one

        Returns:
            Updated event, or None when the condition did not match
        """
        pass

    @abstractmethod
    async def enable_seat_selection(self, *, event_id: int) -> Optional[Event]:
        """
        Set has_seat_selection on the event row

        The row stays write-locked until the unit of work ends, so seat setups
        for one event run one after another.

        Returns:
            Updated event, or None when the event does not exist
        """
        pass
