from datetime import datetime, timezone
from enum import StrEnum
from typing import List, Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.exception.exceptions import AlreadyCancelledError
from src.platform.logging.loguru_io import Logger


class BookingStatus(StrEnum):
    CONFIRMED = 'Confirmed'
    CANCELLED = 'Cancelled'


@attrs.define
class Booking:
    id: UUID
    user_id: int
    event_id: int
    user_name: str
    user_email: str
    tickets: int
    seat_ids: List[int] = attrs.field(factory=list)
    total_amount: int = 0
    status: BookingStatus = BookingStatus.CONFIRMED
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        user_id: int,
        event_id: int,
        user_name: str,
        user_email: str,
        tickets: int,
        seat_ids: Optional[List[int]] = None,
        total_amount: int = 0,
    ) -> 'Booking':
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid7(),
            user_id=user_id,
            event_id=event_id,
            user_name=user_name,
            user_email=user_email,
            tickets=tickets,
            seat_ids=sorted(seat_ids or []),
            total_amount=total_amount,
            status=BookingStatus.CONFIRMED,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_seat_booking(self) -> bool:
        return bool(self.seat_ids)

    @Logger.io
    def cancel(self) -> 'Booking':
        if self.status == BookingStatus.CANCELLED:
            raise AlreadyCancelledError()

        now = datetime.now(timezone.utc)
        return attrs.evolve(self, status=BookingStatus.CANCELLED, updated_at=now)
