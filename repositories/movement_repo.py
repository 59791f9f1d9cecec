"""
repositories/movement_repo.py
------------------------------
Data access layer for movements (exercises workouts are tagged with).
"""

from typing import Optional

from errors import NotFoundError
from models.workout import Movement
from repositories.base import Repository
from utils.logger import get_logger
from utils.sql import (
    CompareMode,
    Field,
    FieldMap,
    QueryParams,
    build_filter_query,
    build_insert_query,
    build_update_query,
)

logger = get_logger(__name__)

MOVEMENT_FIELDS = FieldMap(
    Field("movement_name", "movement_name", CompareMode.PARTIAL_MATCH),
    Field("youtube_id", "youtube_id"),
)

MOVEMENT_COLUMNS = "id, movement_name, youtube_id"


class MovementRepository(Repository):
    """Repository for CRUD operations on the movements table."""

    def create(self, data: dict) -> Movement:
        """Insert a movement. `data` must include movement_name."""
        insert = build_insert_query(data, MOVEMENT_FIELDS)
        with self._transaction() as db:
            row = db.fetch_one(
                f"INSERT INTO movements {insert.sql} RETURNING {MOVEMENT_COLUMNS}",
                insert.values,
            )
        logger.info(f"Created movement #{row['id']} '{row['movement_name']}'")
        return Movement.from_row(row)

    def find_all(self, filters: Optional[dict] = None) -> list[Movement]:
        """Fetch movements; movement_name matches partially, youtube_id exactly."""
        where = build_filter_query(filters, MOVEMENT_FIELDS)
        with self._transaction() as db:
            rows = db.fetch_all(
                f"SELECT {MOVEMENT_COLUMNS} FROM movements {where.sql} ORDER BY movement_name, id",
                where.values,
            )
        return [Movement.from_row(r) for r in rows]

    def find(self, movement_id: int) -> Movement:
        with self._transaction() as db:
            row = db.fetch_one(f"SELECT {MOVEMENT_COLUMNS} FROM movements WHERE id = $1", [movement_id])
        if not row:
            raise NotFoundError(f"No movement: {movement_id}")
        return Movement.from_row(row)

    def update(self, movement_id: int, data: dict) -> Movement:
        params = QueryParams()
        set_clause = build_update_query(data, MOVEMENT_FIELDS, params)
        id_ph = params.add(movement_id)
        with self._transaction() as db:
            row = db.fetch_one(
                f"UPDATE movements {set_clause.sql} WHERE id = {id_ph} RETURNING {MOVEMENT_COLUMNS}",
                params.values,
            )
        if not row:
            raise NotFoundError(f"No movement: {movement_id}")
        return Movement.from_row(row)

    def remove(self, movement_id: int) -> None:
        """Delete a movement and untag it from every workout."""
        with self._transaction() as db:
            self._ensure_exists(db, "movements", movement_id, "movement")
            db.execute("DELETE FROM workouts_movements WHERE movement_id = $1", [movement_id])
            if not db.fetch_one("DELETE FROM movements WHERE id = $1 RETURNING id", [movement_id]):
                raise NotFoundError(f"No movement: {movement_id}")
        logger.info(f"Deleted movement #{movement_id}")
