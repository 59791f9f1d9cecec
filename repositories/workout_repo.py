"""
repositories/workout_repo.py
-----------------------------
Data access layer for workouts and their movement tags.
All SQL queries related to the `workouts` and `workouts_movements` tables live here.
"""

from typing import Iterable, Optional

from errors import NotFoundError
from models.workout import Movement, Workout
from repositories.base import Repository
from utils.dates import normalize_dates
from utils.logger import get_logger
from utils.sql import (
    CompareMode,
    Field,
    FieldMap,
    Fragment,
    QueryParams,
    build_filter_query,
    build_insert_query,
    build_update_query,
    date_column,
)

logger = get_logger(__name__)

WORKOUT_FIELDS = FieldMap(
    Field("sw_id", "sw_id", CompareMode.PARTIAL_MATCH),
    Field("name", "wo_name", CompareMode.PARTIAL_MATCH),
    Field("description", "wo_description", CompareMode.PARTIAL_MATCH),
    Field("category", "category", CompareMode.PARTIAL_MATCH),
    Field("score_type", "score_type", CompareMode.PARTIAL_MATCH),
    Field("featured_date", "featured_date", CompareMode.DATE_EQUALS),
    Field("create_by", "create_by"),
)
WORKOUT_UPDATES = WORKOUT_FIELDS.only(
    "sw_id", "name", "description", "category", "score_type", "featured_date"
)

WORKOUT_COLUMNS = f"""
    id, sw_id, wo_name AS name, wo_description AS description, category, score_type,
    {date_column("create_date", "create_date")},
    {date_column("modify_date", "modify_date")},
    {date_column("featured_date", "featured_date")},
    create_by
"""


def build_workout_search(
    filters: Optional[dict] = None,
    keyword: Optional[str] = None,
    movement_ids: Iterable[int] = (),
) -> Fragment:
    """
    Build the query behind `WorkoutRepository.find_all`.

    The candidate set is assembled in three steps, in this order:
        1. field filters, AND'd together;
        2. the keyword, matched against name OR description and AND'd onto
           the field filters (or used alone when there are none);
        3. one INTERSECT per movement id, so only workouts tagged with
           every requested movement survive.

    Returns:
        Fragment with the full SELECT and its values.
    """
    params = QueryParams()
    where = build_filter_query(filters, WORKOUT_FIELDS, params).sql

    if keyword:
        ph = params.add(f"%{keyword}%")
        match = f"(wo_name ILIKE {ph} OR wo_description ILIKE {ph})"
        where = f"{where} AND {match}" if where else f"WHERE {match}"

    candidates = " ".join(part for part in ("SELECT id FROM workouts", where) if part)
    for movement_id in movement_ids:
        candidates += (
            " INTERSECT SELECT wo_id FROM workouts_movements"
            f" WHERE movement_id = {params.add(movement_id)}"
        )

    sql = f"""
        SELECT w.id, w.wo_name AS name, w.wo_description AS description,
               w.category, w.score_type,
               {date_column("w.featured_date", "featured_date")}
        FROM ({candidates}) i
        JOIN workouts w ON w.id = i.id
        ORDER BY w.wo_name, w.id
    """
    return Fragment(sql, params.values)


class WorkoutRepository(Repository):
    """Repository for CRUD operations on the workouts table."""

    # ── CREATE ────────────────────────────────────────────

    def create(self, data: dict) -> Workout:
        """
        Insert a new workout and tag it with movements.

        Args:
            data: Must include name; may include sw_id, description,
                category, score_type, featured_date, create_by and
                movement_ids (list of movement ids).

        Raises:
            NotFoundError: If a movement id or the creator does not exist.
        """
        data = normalize_dates(data, ["featured_date"])
        movement_ids = list(dict.fromkeys(data.pop("movement_ids", None) or []))
        with self._transaction() as db:
            if data.get("create_by") is not None:
                self._ensure_exists(db, "users", data["create_by"], "user")
            self._ensure_movements(db, movement_ids)

            insert = build_insert_query(data, WORKOUT_FIELDS)
            row = db.fetch_one(
                f"INSERT INTO workouts {insert.sql} RETURNING id",
                insert.values,
            )
            for movement_id in movement_ids:
                db.execute(
                    "INSERT INTO workouts_movements (wo_id, movement_id) VALUES ($1, $2)",
                    [row["id"], movement_id],
                )
            workout = self._find(db, row["id"])
        logger.info(f"Created workout #{workout.id} '{workout.name}' with {len(movement_ids)} movements")
        return workout

    @staticmethod
    def _ensure_movements(db, movement_ids: list[int]) -> None:
        if not movement_ids:
            return
        rows = db.fetch_all("SELECT id FROM movements WHERE id = ANY($1)", [movement_ids])
        missing = sorted(set(movement_ids) - {r["id"] for r in rows})
        if missing:
            raise NotFoundError(f"No movement: {', '.join(str(m) for m in missing)}")

    # ── READ ──────────────────────────────────────────────

    def find_all(self, filters: Optional[dict] = None) -> list[Workout]:
        """
        Fetch workouts matching optional filters.

        Filters: sw_id, name, description, category, score_type (partial
        match), create_by (exact), featured_date (same day), keyword (name
        or description), movement_ids (workout must have all of them).
        """
        filters = dict(filters or {})
        keyword = filters.pop("keyword", None)
        movement_ids = filters.pop("movement_ids", None) or []

        query = build_workout_search(filters, keyword, movement_ids)
        with self._transaction() as db:
            rows = db.fetch_all(query.sql, query.values)
        return [Workout.from_row(r) for r in rows]

    def find(self, workout_id: int) -> Workout:
        """
        Fetch a workout with its movements.

        Raises:
            NotFoundError: If there is no such workout.
        """
        with self._transaction() as db:
            return self._find(db, workout_id)

    def _find(self, db, workout_id: int) -> Workout:
        row = db.fetch_one(f"SELECT {WORKOUT_COLUMNS} FROM workouts WHERE id = $1", [workout_id])
        if not row:
            raise NotFoundError(f"No workout: {workout_id}")

        movements = db.fetch_all(
            """
            SELECT m.id, m.movement_name, m.youtube_id
            FROM workouts_movements wm
            JOIN movements m ON wm.movement_id = m.id
            WHERE wm.wo_id = $1
            ORDER BY m.movement_name
            """,
            [workout_id],
        )
        return Workout.from_row(row, movements=[Movement.from_row(m) for m in movements])

    # ── UPDATE ────────────────────────────────────────────

    def update(self, workout_id: int, data: dict) -> Workout:
        """
        Update a workout.

        Args:
            data: Any of sw_id, name, description, category, score_type,
                featured_date.

        Raises:
            EmptyInputError: If no updatable field is supplied.
            NotFoundError: If there is no such workout.
        """
        params = QueryParams()
        set_clause = build_update_query(normalize_dates(data, ["featured_date"]), WORKOUT_UPDATES, params)
        id_ph = params.add(workout_id)
        with self._transaction() as db:
            row = db.fetch_one(
                f"""
                UPDATE workouts
                {set_clause.sql}, modify_date = CURRENT_TIMESTAMP
                WHERE id = {id_ph}
                RETURNING id
                """,
                params.values,
            )
            if not row:
                raise NotFoundError(f"No workout: {workout_id}")
            workout = self._find(db, workout_id)
        logger.info(f"Updated workout #{workout_id}")
        return workout

    # ── DELETE ────────────────────────────────────────────

    def remove(self, workout_id: int) -> None:
        """
        Delete a workout with its movement tags, postings, results and the
        comments on those results.

        Raises:
            NotFoundError: If there is no such workout.
        """
        with self._transaction() as db:
            self._ensure_exists(db, "workouts", workout_id, "workout")
            db.execute(
                "DELETE FROM comments WHERE result_id IN (SELECT id FROM results WHERE workout_id = $1)",
                [workout_id],
            )
            db.execute("DELETE FROM results WHERE workout_id = $1", [workout_id])
            db.execute("DELETE FROM postings WHERE wo_id = $1", [workout_id])
            db.execute("DELETE FROM workouts_movements WHERE wo_id = $1", [workout_id])
            if not db.fetch_one("DELETE FROM workouts WHERE id = $1 RETURNING id", [workout_id]):
                raise NotFoundError(f"No workout: {workout_id}")
        logger.info(f"Deleted workout #{workout_id}")
