"""Booking domain validation functions, called explicitly by use cases."""

from datetime import datetime, timezone
from typing import Iterable, List, Optional

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import EventExpiredError, ValidationError
from src.service.booking.domain.entity.event_entity import Event
from src.service.booking.domain.value_object.seat_layout import SeatLayout


EVENT_NAME_MAX_LENGTH = 100
EVENT_LOCATION_MAX_LENGTH = 200
EVENT_DESCRIPTION_MAX_LENGTH = 500


def ensure_aware(value: datetime) -> datetime:
    """Normalise to an aware UTC datetime; naive values are taken as UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class StringValidators:
    @staticmethod
    def validate_required_string(value: Optional[str], field_name: str, max_length: int) -> str:
        if value is None or not value.strip():
            raise ValidationError(f'{field_name} is required')
        value = value.strip()
        if len(value) > max_length:
            raise ValidationError(f'{field_name} must be at most {max_length} characters')
        return value

    @staticmethod
    def validate_event_name(value: Optional[str]) -> str:
        return StringValidators.validate_required_string(value, 'Event name', EVENT_NAME_MAX_LENGTH)

    @staticmethod
    def validate_event_location(value: Optional[str]) -> str:
        return StringValidators.validate_required_string(
            value, 'Location', EVENT_LOCATION_MAX_LENGTH
        )

    @staticmethod
    def validate_event_description(value: Optional[str]) -> Optional[str]:
        if value is not None and len(value) > EVENT_DESCRIPTION_MAX_LENGTH:
            raise ValidationError(
                f'Description must be at most {EVENT_DESCRIPTION_MAX_LENGTH} characters'
            )
        return value


class NumericValidators:
    @staticmethod
    def validate_total_seats(value: int) -> None:
        if value < 1:
            raise ValidationError('Total seats must be at least 1')

    @staticmethod
    def validate_price(value: int, field_name: str = 'Price') -> None:
        if value < 0:
            raise ValidationError(f'{field_name} cannot be negative')


class DateValidators:
    @staticmethod
    def validate_future_date(value: datetime, now: Optional[datetime] = None) -> datetime:
        value = ensure_aware(value)
        if value <= (now or datetime.now(timezone.utc)):
            raise ValidationError('Event date must be in the future')
        return value

    @staticmethod
    def ensure_event_not_expired(event: Event, now: Optional[datetime] = None) -> None:
        if event.is_past(now):
            raise EventExpiredError('Event has already taken place')


class BusinessRuleValidators:
    @staticmethod
    def validate_ticket_count(count: int) -> None:
        if count < settings.MIN_TICKETS_PER_BOOKING:
            raise ValidationError(f'Minimum {settings.MIN_TICKETS_PER_BOOKING} ticket required')
        if count > settings.MAX_TICKETS_PER_BOOKING:
            raise ValidationError(
                f'Maximum {settings.MAX_TICKETS_PER_BOOKING} tickets per booking'
            )

    @staticmethod
    def validate_seat_ids(seat_ids: Iterable[int]) -> List[int]:
        seat_ids = list(seat_ids)
        if not seat_ids:
            raise ValidationError('At least one seat must be selected')
        if len(set(seat_ids)) != len(seat_ids):
            raise ValidationError('Duplicate seat ids in request')
        if len(seat_ids) > settings.MAX_TICKETS_PER_BOOKING:
            raise ValidationError(
                f'Maximum {settings.MAX_TICKETS_PER_BOOKING} tickets per booking'
            )
        return sorted(seat_ids)

    @staticmethod
    def validate_generic_booking_mode(event: Event) -> None:
        if event.has_seat_selection:
            raise ValidationError('This event requires seat selection')

    @staticmethod
    def validate_seat_booking_mode(event: Event) -> None:
        if not event.has_seat_selection:
            raise ValidationError('This event does not support seat selection')

    @staticmethod
    def validate_seat_layout(layout: SeatLayout) -> None:
        seen_rows: set[str] = set()
        for section in layout.sections:
            if not section.name.strip():
                raise ValidationError('Section name is required')
            if section.price_multiplier < 0:
                raise ValidationError('Price multiplier cannot be negative')
            overlap = seen_rows.intersection(section.rows)
            if overlap:
                raise ValidationError(f'Rows assigned to more than one section: {sorted(overlap)}')
            seen_rows.update(section.rows)
