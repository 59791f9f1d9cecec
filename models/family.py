"""
models/family.py
----------------
Domain model for families (groups of users).
"""

from dataclasses import dataclass
from typing import Optional

from models.base import RowModel


@dataclass
class Family(RowModel):
    """
    Represents a family.

    Attributes:
        id: Database primary key.
        family_name: Display name; not unique.
        join_code: Optional code users can join with.
        image_url: Optional picture URL.
        bio: Optional description.
        create_date: ``YYYYMMDD`` creation date.
        modify_date: ``YYYYMMDD`` date of the last update, if any.
        users: Member summaries derived from memberships, only loaded by `find`.
    """
    id: int
    family_name: str
    join_code: Optional[str] = None
    image_url: Optional[str] = None
    bio: Optional[str] = None
    create_date: Optional[str] = None
    modify_date: Optional[str] = None
    users: Optional[list[dict]] = None

    def member_ids(self) -> list[int]:
        """Ids of the loaded members (empty when members were not loaded)."""
        return [u["user_id"] for u in self.users or []]
