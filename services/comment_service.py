"""
services/comment_service.py
----------------------------
Business logic for comments on results.
"""

from typing import Optional

from errors import ForbiddenError
from models.comment import Comment
from repositories.comment_repo import CommentRepository
from repositories.result_repo import ResultRepository
from security.auth import (
    Actor,
    ensure_logged_in,
    ensure_member_or_admin,
    ensure_self_or_admin,
    login_required,
)
from services.membership_service import MembershipService
from utils.logger import get_logger

logger = get_logger(__name__)


class CommentService:
    """
    Members of the result's family may comment, only as themselves. Comments
    are edited or deleted by their author or a global admin.
    """

    def __init__(
        self,
        repo: Optional[CommentRepository] = None,
        results: Optional[ResultRepository] = None,
        memberships: Optional[MembershipService] = None,
    ):
        self.repo = repo or CommentRepository()
        self.results = results or ResultRepository()
        self.memberships = memberships or MembershipService()

    def create(self, actor: Optional[Actor], data: dict) -> Comment:
        """Comment on data['result_id']; `user_id` defaults to the actor."""
        ensure_logged_in(actor)
        data = {**data}
        data.setdefault("user_id", actor.user_id)
        if data["user_id"] != actor.user_id:
            logger.warning(f"User {actor.user_id} tried to comment as {data['user_id']}")
            raise ForbiddenError("A user can only comment as themselves")
        result = self.results.find(data.get("result_id"))
        ensure_member_or_admin(actor, result.family_id, self.memberships)
        return self.repo.create(data)

    @login_required
    def find_all(self, actor: Optional[Actor], filters: Optional[dict] = None) -> list[Comment]:
        return self.repo.find_all(filters)

    @login_required
    def find(self, actor: Optional[Actor], comment_id: int) -> Comment:
        return self.repo.find(comment_id)

    def update(self, actor: Optional[Actor], comment_id: int, data: dict) -> Comment:
        ensure_logged_in(actor)
        ensure_self_or_admin(actor, self.repo.find(comment_id).user_id)
        return self.repo.update(comment_id, data)

    def remove(self, actor: Optional[Actor], comment_id: int) -> None:
        ensure_logged_in(actor)
        ensure_self_or_admin(actor, self.repo.find(comment_id).user_id)
        self.repo.remove(comment_id)
