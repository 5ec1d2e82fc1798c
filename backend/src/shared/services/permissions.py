"""
Role checks shared by the services.

Roles are always read from the Profile row loaded for the request, never
from the token, so a demotion takes effect on the next call.
"""

from typing import Optional

from src.shared.core.exceptions import AuthenticationError, AuthorizationError
from src.shared.models.enums import UserRole
from src.shared.models.profile import Profile


def require_login(user: Optional[Profile], message: str = "Not authenticated") -> Profile:
    if user is None:
        raise AuthenticationError(message)
    return user


def require_staff(user: Optional[Profile], message: str = "Not authorized") -> Profile:
    """Admin or editor."""
    user = require_login(user)
    if not user.is_staff:
        raise AuthorizationError(message)
    return user


def require_admin(user: Optional[Profile]) -> Profile:
    user = require_login(user)
    if user.role != UserRole.ADMIN:
        raise AuthorizationError("Admin access required")
    return user


def is_owner_or_staff(user: Profile, owner_id) -> bool:
    return user.is_staff or (owner_id is not None and user.id == owner_id)
