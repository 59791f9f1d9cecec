"""
models/user.py
--------------
Domain model for users.
"""

from dataclasses import dataclass
from typing import Optional

from models.base import RowModel


@dataclass
class User(RowModel):
    """
    Represents a registered user.

    The password hash is stored by the repository but never loaded back into
    this object.

    Attributes:
        id: Database primary key.
        email: Unique login email.
        first_name: Given name.
        last_name: Family name.
        is_admin: Global (site-wide) admin flag.
        user_status: 'active', 'pending' or 'blocked'.
        image_url: Optional avatar URL.
        bio: Optional free text.
        create_date: ``YYYYMMDD`` creation date.
        modify_date: ``YYYYMMDD`` date of the last update, if any.
        families: Memberships of the user, only loaded by `find`.
    """
    id: int
    email: str
    first_name: str
    last_name: str
    is_admin: bool = False
    user_status: str = "active"
    image_url: Optional[str] = None
    bio: Optional[str] = None
    create_date: Optional[str] = None
    modify_date: Optional[str] = None
    families: Optional[list[dict]] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __str__(self) -> str:
        return f"{self.full_name} <{self.email}>"
