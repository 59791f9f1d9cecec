"""Tests for the authorization predicates and guards in security/auth.py."""

from unittest.mock import MagicMock

import pytest

from errors import ForbiddenError, UnauthorizedError
from security.auth import (
    Actor,
    ensure_admin,
    ensure_logged_in,
    ensure_member_or_admin,
    ensure_self_or_admin,
    is_member_or_admin,
    is_self_or_admin,
    login_required,
)

ADMIN = Actor(user_id=1, is_admin=True)
ANN = Actor(user_id=2)


def memberships(*pairs):
    lookup = MagicMock()
    lookup.is_member.side_effect = lambda user_id, family_id: (user_id, family_id) in pairs
    return lookup


def test_ensure_logged_in():
    assert ensure_logged_in(ANN) is ANN
    with pytest.raises(UnauthorizedError, match="logged in users only") as exc:
        ensure_logged_in(None)
    assert exc.value.status == 401


def test_ensure_admin():
    ensure_admin(ADMIN)
    with pytest.raises(ForbiddenError):
        ensure_admin(ANN)
    with pytest.raises(ForbiddenError):
        ensure_admin(None)


def test_self_or_admin():
    assert is_self_or_admin(ANN, 2)
    assert is_self_or_admin(ADMIN, 2)
    assert not is_self_or_admin(ANN, 3)
    assert not is_self_or_admin(None, 2)


def test_ensure_self_or_admin_distinguishes_anonymous_from_forbidden():
    with pytest.raises(UnauthorizedError):
        ensure_self_or_admin(None, 2)
    with pytest.raises(ForbiddenError) as exc:
        ensure_self_or_admin(ANN, 3)
    assert exc.value.status == 403


def test_member_or_admin():
    lookup = memberships((2, 10))

    assert is_member_or_admin(ANN, 10, lookup)
    assert not is_member_or_admin(ANN, 11, lookup)
    assert not is_member_or_admin(None, 10, lookup)


def test_admin_skips_membership_lookup():
    lookup = memberships()

    assert is_member_or_admin(ADMIN, 10, lookup)
    lookup.is_member.assert_not_called()


def test_ensure_member_or_admin():
    with pytest.raises(ForbiddenError, match="family 11"):
        ensure_member_or_admin(ANN, 11, memberships((2, 10)))
    with pytest.raises(UnauthorizedError):
        ensure_member_or_admin(None, 10, memberships())


def test_login_required_decorator():
    class Service:
        @login_required
        def whoami(self, actor):
            return actor.user_id

    assert Service().whoami(ANN) == 2
    assert Service.whoami.__name__ == "whoami"
    with pytest.raises(UnauthorizedError):
        Service().whoami(None)
