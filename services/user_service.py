"""
services/user_service.py
-------------------------
Business logic for user accounts.
"""

from typing import Optional

from models.user import User
from repositories.user_repo import UserRepository
from security.auth import Actor, ensure_admin, ensure_self_or_admin, login_required


class UserService:
    """Registration and self-or-admin profile management."""

    def __init__(self, repo: Optional[UserRepository] = None):
        self.repo = repo or UserRepository()

    def register(self, data: dict) -> User:
        """
        Create an account. `data['password']` must already be hashed.
        Registration cannot grant admin rights.
        """
        return self.repo.create({**data, "is_admin": False})

    def create(self, actor: Optional[Actor], data: dict) -> User:
        """Create an account on someone's behalf (global admins only)."""
        ensure_admin(actor)
        return self.repo.create(data)

    @login_required
    def find_all(self, actor: Optional[Actor], filters: Optional[dict] = None) -> list[User]:
        return self.repo.find_all(filters)

    @login_required
    def find(self, actor: Optional[Actor], user_id: int) -> User:
        return self.repo.find(user_id)

    def update(self, actor: Optional[Actor], user_id: int, data: dict) -> User:
        ensure_self_or_admin(actor, user_id)
        return self.repo.update(user_id, data)

    def remove(self, actor: Optional[Actor], user_id: int) -> None:
        ensure_self_or_admin(actor, user_id)
        self.repo.remove(user_id)
