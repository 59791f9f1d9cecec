"""
security/auth.py
-----------------
Authorization rules shared by the services.

Two composite rules gate most operations:
    - self-or-admin: the actor is the user in question, or a global admin.
    - member-or-admin: the actor belongs to the family in question, or is a
      global admin.

Each rule exists as a boolean predicate (`is_*`) and as a guard
(`ensure_*`) that raises instead of returning False.
"""

from dataclasses import dataclass
from functools import wraps
from typing import Callable, Optional, Protocol

from errors import ForbiddenError, UnauthorizedError
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Actor:
    """The authenticated caller, as supplied by the identity layer."""
    user_id: int
    is_admin: bool = False


class MembershipLookup(Protocol):
    def is_member(self, user_id: int, family_id: int) -> bool: ...


def ensure_logged_in(actor: Optional[Actor]) -> Actor:
    """Raise UnauthorizedError when there is no actor."""
    if actor is None:
        raise UnauthorizedError("Access to logged in users only")
    return actor


def ensure_admin(actor: Optional[Actor]) -> None:
    if actor is None or not actor.is_admin:
        _deny(actor, "Access to admin only")


def is_self_or_admin(actor: Optional[Actor], user_id: int) -> bool:
    return actor is not None and (actor.is_admin or actor.user_id == user_id)


def ensure_self_or_admin(actor: Optional[Actor], user_id: int) -> None:
    ensure_logged_in(actor)
    if not is_self_or_admin(actor, user_id):
        _deny(actor, f"Access to admin and user {user_id} only")


def is_member_or_admin(actor: Optional[Actor], family_id: int, memberships: MembershipLookup) -> bool:
    """
    True if the actor is a global admin or has a membership row for the family.

    Admins short-circuit, so no membership lookup is made for them.
    """
    if actor is None:
        return False
    return actor.is_admin or memberships.is_member(actor.user_id, family_id)


def ensure_member_or_admin(actor: Optional[Actor], family_id: int, memberships: MembershipLookup) -> None:
    ensure_logged_in(actor)
    if not is_member_or_admin(actor, family_id, memberships):
        _deny(actor, f"Access to members of family {family_id} only")


def login_required(func: Callable):
    """
    Decorator for service methods taking the actor as first argument.

    Usage:
        @login_required
        def find_all(self, actor, filters=None):
            ...
    """
    @wraps(func)
    def wrapper(self, actor: Optional[Actor], *args, **kwargs):
        ensure_logged_in(actor)
        return func(self, actor, *args, **kwargs)

    return wrapper


def _deny(actor: Optional[Actor], message: str) -> None:
    logger.warning(f"Forbidden: user_id={getattr(actor, 'user_id', None)} - {message}")
    raise ForbiddenError(message)
