from typing import Any


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    code: str = 'ERROR'

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    @property
    def extra(self) -> dict[str, Any]:
        """Additional fields rendered next to `detail` in the error response"""
        return {}


class DomainError(CustomBaseError):
    code = 'DOMAIN_ERROR'

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ValidationError(DomainError):
    code = 'VALIDATION_ERROR'

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class EventExpiredError(DomainError):
    code = 'EVENT_EXPIRED'

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class AlreadyCancelledError(DomainError):
    code = 'ALREADY_CANCELLED'

    def __init__(self, message: str = 'Booking is already cancelled') -> None:
        super().__init__(message, 400)


class ForbiddenError(CustomBaseError):
    code = 'FORBIDDEN'

    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    code = 'NOT_FOUND'

    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    code = 'CONFLICT'

    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class InsufficientCapacityError(ConflictError):
    code = 'INSUFFICIENT_CAPACITY'

    def __init__(self, *, requested: int, available_seats: int) -> None:
        self.requested = requested
        self.available_seats = available_seats
        super().__init__('Not enough seats available')

    @property
    def extra(self) -> dict[str, Any]:
        return {'available_seats': self.available_seats, 'requested': self.requested}


class SeatConflictError(ConflictError):
    code = 'SEAT_CONFLICT'

    def __init__(self, seat_ids: list[int] | None = None) -> None:
        self.seat_ids = sorted(seat_ids or [])
        super().__init__('Some seats are not available or do not exist')

    @property
    def extra(self) -> dict[str, Any]:
        return {'seat_ids': self.seat_ids}


class DuplicateBookingError(ConflictError):
    code = 'DUPLICATE_BOOKING'

    def __init__(self, message: str = 'You already have a confirmed booking for this event') -> None:
        super().__init__(message)


class AuthenticationError(CustomBaseError):
    code = 'UNAUTHENTICATED'

    def __init__(self, message: str) -> None:
        super().__init__(message, 401)
