"""
models/posting.py
-----------------
Domain model for a workout posted to a family.
"""

from dataclasses import dataclass
from typing import Optional

from models.base import RowModel


@dataclass
class Posting(RowModel):
    """
    A workout assigned to a family on a given date.

    `workout_name`, `workout_description` and `score_type` are read from the
    joined workout row; they are not stored on the posting.
    """
    id: int
    family_id: int
    workout_id: int
    post_date: Optional[str] = None
    post_by: Optional[int] = None
    create_date: Optional[str] = None
    modify_date: Optional[str] = None
    workout_name: Optional[str] = None
    workout_description: Optional[str] = None
    score_type: Optional[str] = None
