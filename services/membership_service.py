"""
services/membership_service.py
-------------------------------
Membership checks and guarded membership operations.
"""

from typing import Optional

from errors import ForbiddenError
from models.membership import Membership
from repositories.membership_repo import MembershipRepository
from security.auth import Actor, ensure_logged_in, is_self_or_admin, login_required
from utils.logger import get_logger

logger = get_logger(__name__)


class MembershipService:
    """
    Answers "is this user in that family?" and manages memberships.

    Responsibilities:
        - `is_member`, the lookup behind every member-or-admin guard.
        - Joining, leaving and editing memberships, limited to the user
          themselves, an admin of the family or a global admin.
    """

    def __init__(self, repo: Optional[MembershipRepository] = None):
        self.repo = repo or MembershipRepository()

    def is_member(self, user_id: int, family_id: int) -> bool:
        """
        True if the user has a membership row for the family.

        Lists every membership of the user and looks for the family id.
        """
        family_ids = {m.family_id for m in self.repo.find_all({"user_id": user_id})}
        return family_id in family_ids

    def is_family_admin(self, user_id: int, family_id: int) -> bool:
        """True if the user is an admin member of the family."""
        return bool(self.repo.find_all({"user_id": user_id, "family_id": family_id, "is_admin": True}))

    # ── Guarded operations ────────────────────────────────

    def join(self, actor: Optional[Actor], data: dict) -> Membership:
        """Add data['user_id'] to data['family_id']."""
        self._ensure_self_or_family_admin(actor, data.get("user_id"), data.get("family_id"))
        if data.get("is_admin") and not self._manages_family(actor, data.get("family_id")):
            raise ForbiddenError("Only family admins can grant admin rights")
        return self.repo.create(data)

    @login_required
    def find_all(self, actor: Optional[Actor], filters: Optional[dict] = None) -> list[Membership]:
        return self.repo.find_all(filters)

    def find(self, actor: Optional[Actor], user_id: int, family_id: int) -> Membership:
        ensure_logged_in(actor)
        if not (is_self_or_admin(actor, user_id) or self.is_member(actor.user_id, family_id)):
            raise ForbiddenError(f"Access to members of family {family_id} only")
        return self.repo.find(user_id, family_id)

    def update(self, actor: Optional[Actor], user_id: int, family_id: int, data: dict) -> Membership:
        """
        Edit a membership. Changing `is_admin` is reserved for family admins
        and global admins.
        """
        self._ensure_self_or_family_admin(actor, user_id, family_id)
        if "is_admin" in data and not self._manages_family(actor, family_id):
            raise ForbiddenError("Only family admins can grant admin rights")
        return self.repo.update(user_id, family_id, data)

    def leave(self, actor: Optional[Actor], user_id: int, family_id: int) -> None:
        """Remove the user from the family."""
        self._ensure_self_or_family_admin(actor, user_id, family_id)
        self.repo.remove(user_id, family_id)

    # ── Helpers ───────────────────────────────────────────

    def _manages_family(self, actor: Actor, family_id: int) -> bool:
        return actor.is_admin or self.is_family_admin(actor.user_id, family_id)

    def _ensure_self_or_family_admin(self, actor: Optional[Actor], user_id: int, family_id: int) -> None:
        ensure_logged_in(actor)
        if is_self_or_admin(actor, user_id) or self.is_family_admin(actor.user_id, family_id):
            return
        logger.warning(f"Forbidden: user_id={actor.user_id} tried to manage membership {user_id}-{family_id}")
        raise ForbiddenError(f"Access to admin, family admins and user {user_id} only")
