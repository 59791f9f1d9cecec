"""
services/posting_service.py
----------------------------
Business logic for posting workouts to families.
"""

from typing import Optional

from errors import ForbiddenError
from models.posting import Posting
from repositories.posting_repo import PostingRepository
from security.auth import Actor, ensure_logged_in, ensure_member_or_admin, login_required
from services.membership_service import MembershipService
from utils.logger import get_logger

logger = get_logger(__name__)


class PostingService:
    """
    A user may only post as themselves and only to families they belong to
    (global admins may post anywhere). Reading and editing a posting is
    limited to members of its family.
    """

    def __init__(
        self,
        repo: Optional[PostingRepository] = None,
        memberships: Optional[MembershipService] = None,
    ):
        self.repo = repo or PostingRepository()
        self.memberships = memberships or MembershipService()

    def create(self, actor: Optional[Actor], data: dict) -> Posting:
        """
        Post a workout to a family. `post_by` defaults to the actor.

        Raises:
            ForbiddenError: If posting as someone else, or to a family the
                actor is not a member of.
        """
        ensure_logged_in(actor)
        data = {**data}
        data.setdefault("post_by", actor.user_id)
        if data["post_by"] != actor.user_id:
            logger.warning(f"User {actor.user_id} tried to post as {data['post_by']}")
            raise ForbiddenError("A user can only post as themselves")
        ensure_member_or_admin(actor, data.get("family_id"), self.memberships)
        return self.repo.create(data)

    @login_required
    def find_all(self, actor: Optional[Actor], filters: Optional[dict] = None) -> list[Posting]:
        """
        List postings. Non-admins filtering by family must belong to it.
        """
        family_id = (filters or {}).get("family_id")
        if family_id is not None:
            ensure_member_or_admin(actor, family_id, self.memberships)
        return self.repo.find_all(filters)

    def find(self, actor: Optional[Actor], posting_id: int) -> Posting:
        ensure_logged_in(actor)
        posting = self.repo.find(posting_id)
        ensure_member_or_admin(actor, posting.family_id, self.memberships)
        return posting

    def update(self, actor: Optional[Actor], posting_id: int, data: dict) -> Posting:
        self.find(actor, posting_id)
        return self.repo.update(posting_id, data)

    def remove(self, actor: Optional[Actor], posting_id: int) -> None:
        self.find(actor, posting_id)
        self.repo.remove(posting_id)
