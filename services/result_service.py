"""
services/result_service.py
---------------------------
Business logic for logging workout results.
"""

from typing import Optional

from models.result import Result
from repositories.result_repo import ResultRepository
from security.auth import (
    Actor,
    ensure_logged_in,
    ensure_member_or_admin,
    ensure_self_or_admin,
    login_required,
)
from services.membership_service import MembershipService


class ResultService:
    """
    Results are logged by the athlete themselves, only in families they
    belong to. Members of the family can read them; only the athlete (or a
    global admin) can edit or delete them.
    """

    def __init__(
        self,
        repo: Optional[ResultRepository] = None,
        memberships: Optional[MembershipService] = None,
    ):
        self.repo = repo or ResultRepository()
        self.memberships = memberships or MembershipService()

    def create(self, actor: Optional[Actor], data: dict) -> Result:
        """Log a result; `user_id` defaults to the actor."""
        ensure_logged_in(actor)
        data = {**data}
        data.setdefault("user_id", actor.user_id)
        ensure_self_or_admin(actor, data["user_id"])
        ensure_member_or_admin(actor, data.get("family_id"), self.memberships)
        return self.repo.create(data)

    @login_required
    def find_all(self, actor: Optional[Actor], filters: Optional[dict] = None) -> list[Result]:
        family_id = (filters or {}).get("family_id")
        if family_id is not None:
            ensure_member_or_admin(actor, family_id, self.memberships)
        return self.repo.find_all(filters)

    def find(self, actor: Optional[Actor], result_id: int) -> Result:
        ensure_logged_in(actor)
        result = self.repo.find(result_id)
        ensure_member_or_admin(actor, result.family_id, self.memberships)
        return result

    def update(self, actor: Optional[Actor], result_id: int, data: dict) -> Result:
        ensure_logged_in(actor)
        ensure_self_or_admin(actor, self.repo.find(result_id).user_id)
        return self.repo.update(result_id, data)

    def remove(self, actor: Optional[Actor], result_id: int) -> None:
        ensure_logged_in(actor)
        ensure_self_or_admin(actor, self.repo.find(result_id).user_id)
        self.repo.remove(result_id)
