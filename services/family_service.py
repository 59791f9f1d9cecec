"""
services/family_service.py
---------------------------
Business logic for families. Reading, editing and deleting a family is
limited to its members and global admins.
"""

from typing import Optional

from models.family import Family
from repositories.family_repo import FamilyRepository
from security.auth import Actor, ensure_member_or_admin, login_required
from services.membership_service import MembershipService


class FamilyService:
    """Guarded CRUD for families."""

    def __init__(
        self,
        repo: Optional[FamilyRepository] = None,
        memberships: Optional[MembershipService] = None,
    ):
        self.repo = repo or FamilyRepository()
        self.memberships = memberships or MembershipService()

    @login_required
    def create(self, actor: Optional[Actor], data: dict) -> Family:
        return self.repo.create(data)

    @login_required
    def find_all(self, actor: Optional[Actor], filters: Optional[dict] = None) -> list[Family]:
        return self.repo.find_all(filters)

    def find(self, actor: Optional[Actor], family_id: int) -> Family:
        ensure_member_or_admin(actor, family_id, self.memberships)
        return self.repo.find(family_id)

    def update(self, actor: Optional[Actor], family_id: int, data: dict) -> Family:
        ensure_member_or_admin(actor, family_id, self.memberships)
        return self.repo.update(family_id, data)

    def remove(self, actor: Optional[Actor], family_id: int) -> None:
        ensure_member_or_admin(actor, family_id, self.memberships)
        self.repo.remove(family_id)
