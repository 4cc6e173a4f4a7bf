from enum import StrEnum

import attrs

from src.platform.exception.exceptions import ForbiddenError


class UserRole(StrEnum):
    USER = 'user'
    ADMIN = 'admin'


@attrs.frozen
class CurrentUser:
    """Caller identity supplied by the gateway; this service never stores users"""

    id: int
    name: str
    email: str
    role: UserRole = UserRole.USER

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def validate_admin(self) -> None:
        if not self.is_admin:
            raise ForbiddenError('Admin access required')
