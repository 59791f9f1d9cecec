"""
models/result.py
----------------
Domain model for a logged workout result.
"""

from dataclasses import dataclass
from typing import Optional

from models.base import RowModel


@dataclass
class Result(RowModel):
    """
    A user's result for a workout, logged within a family.

    Attributes:
        id: Database primary key.
        user_id: Athlete who logged it.
        family_id: Family the result was shared with.
        workout_id: Workout performed.
        score: Score as entered; its meaning depends on the workout's score type.
        notes: Optional free text.
        complete_date: ``YYYYMMDD`` date the workout was done.
        create_date: ``YYYYMMDD`` creation date.
        modify_date: ``YYYYMMDD`` date of the last update, if any.
    """
    id: int
    user_id: int
    family_id: int
    workout_id: int
    score: Optional[str] = None
    notes: Optional[str] = None
    complete_date: Optional[str] = None
    create_date: Optional[str] = None
    modify_date: Optional[str] = None
