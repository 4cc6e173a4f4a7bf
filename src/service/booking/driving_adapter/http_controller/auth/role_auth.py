"""
Identity from trusted gateway headers

Authentication (passwords, sessions, tokens) happens upstream; the gateway
forwards the authenticated caller as X-User-* headers.
"""

from typing import Optional

from fastapi import Depends, Header
from opentelemetry import trace

from src.platform.exception.exceptions import AuthenticationError, ForbiddenError
from src.service.booking.domain.entity.user_entity import CurrentUser, UserRole


class RoleAuthStrategy:
    @staticmethod
    def can_manage_events(user: CurrentUser) -> bool:
        return user.role == UserRole.ADMIN


async def get_current_user(
    x_user_id: Optional[str] = Header(default=None, alias='X-User-Id'),
    x_user_name: Optional[str] = Header(default=None, alias='X-User-Name'),
    x_user_email: Optional[str] = Header(default=None, alias='X-User-Email'),
    x_user_role: Optional[str] = Header(default=None, alias='X-User-Role'),
) -> CurrentUser:
    if not x_user_id:
        raise AuthenticationError('Not authenticated')
    try:
        user_id = int(x_user_id)
        role = UserRole((x_user_role or UserRole.USER.value).lower())
    except ValueError:
        raise AuthenticationError('Invalid identity headers')

    return CurrentUser(
        id=user_id,
        name=x_user_name or f'user-{user_id}',
        email=x_user_email or '',
        role=role,
    )


async def require_admin(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_admin',
        attributes={
            'user.id': current_user.id,
            'user.role': current_user.role.value,
        },
    ):
        if not RoleAuthStrategy.can_manage_events(current_user):
            raise ForbiddenError('Admin access required')
        return current_user
