"""
models/membership.py
--------------------
Domain model for the user <-> family relationship.
"""

from dataclasses import dataclass
from typing import Optional

from models.base import RowModel


@dataclass
class Membership(RowModel):
    """
    A user's membership in a family. Identified by (user_id, family_id).

    Attributes:
        user_id: Member.
        family_id: Family.
        mem_status: 'active', 'pending' or 'inactive'.
        is_admin: Whether the user administers this family.
        primary_family: Whether this is the user's main family.
        create_date: ``YYYYMMDD`` creation date.
        modify_date: ``YYYYMMDD`` date of the last update, if any.
    """
    user_id: int
    family_id: int
    mem_status: str = "active"
    is_admin: bool = False
    primary_family: bool = False
    create_date: Optional[str] = None
    modify_date: Optional[str] = None
