"""
models/comment.py
-----------------
Domain model for comments on results.
"""

from dataclasses import dataclass
from typing import Optional

from models.base import RowModel


@dataclass
class Comment(RowModel):
    """A comment left by a user on a result."""
    id: int
    result_id: int
    user_id: int
    content: str
    create_date: Optional[str] = None
    modify_date: Optional[str] = None
