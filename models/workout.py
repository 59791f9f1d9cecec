"""
models/workout.py
-----------------
Domain models for workouts and the movements they are tagged with.
"""

from dataclasses import dataclass
from typing import Optional

from models.base import RowModel


@dataclass
class Movement(RowModel):
    """A single exercise (e.g. 'Thruster'), optionally with a demo video."""
    id: int
    movement_name: str
    youtube_id: Optional[str] = None


@dataclass
class Workout(RowModel):
    """
    Represents a workout.

    Attributes:
        id: Database primary key.
        name: Title.
        description: Full description.
        category: 'wod', 'featured', 'girls', 'heroes', 'games' or 'custom'.
        score_type: How results are scored ('time', 'reps', 'load', ...).
        sw_id: Id of the workout in the external source, if imported.
        create_date: ``YYYYMMDD`` creation date.
        modify_date: ``YYYYMMDD`` date of the last update, if any.
        featured_date: ``YYYYMMDD`` date the workout is featured/scheduled.
        create_by: Id of the user who created it.
        movements: Tagged movements, only loaded by `find`.
    """
    id: int
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    score_type: Optional[str] = None
    sw_id: Optional[str] = None
    create_date: Optional[str] = None
    modify_date: Optional[str] = None
    featured_date: Optional[str] = None
    create_by: Optional[int] = None
    movements: Optional[list[Movement]] = None
