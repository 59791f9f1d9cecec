"""
services/workout_service.py
----------------------------
Business logic for the workout library.
"""

from typing import Optional

from models.workout import Movement, Workout
from repositories.movement_repo import MovementRepository
from repositories.workout_repo import WorkoutRepository
from security.auth import Actor, ensure_admin, ensure_logged_in, ensure_self_or_admin, login_required


class WorkoutService:
    """
    Any logged-in user may browse and create workouts; a workout can be
    changed or deleted by its creator or a global admin. Movements are
    managed by global admins.
    """

    def __init__(
        self,
        repo: Optional[WorkoutRepository] = None,
        movements: Optional[MovementRepository] = None,
    ):
        self.repo = repo or WorkoutRepository()
        self.movements = movements or MovementRepository()

    @login_required
    def create(self, actor: Optional[Actor], data: dict) -> Workout:
        """Create a workout; `create_by` defaults to the actor."""
        data = {**data}
        data.setdefault("create_by", actor.user_id)
        ensure_self_or_admin(actor, data["create_by"])
        return self.repo.create(data)

    @login_required
    def find_all(self, actor: Optional[Actor], filters: Optional[dict] = None) -> list[Workout]:
        return self.repo.find_all(filters)

    @login_required
    def find(self, actor: Optional[Actor], workout_id: int) -> Workout:
        return self.repo.find(workout_id)

    def update(self, actor: Optional[Actor], workout_id: int, data: dict) -> Workout:
        self._ensure_owner_or_admin(actor, workout_id)
        return self.repo.update(workout_id, data)

    def remove(self, actor: Optional[Actor], workout_id: int) -> None:
        self._ensure_owner_or_admin(actor, workout_id)
        self.repo.remove(workout_id)

    # ── Movements ─────────────────────────────────────────

    @login_required
    def find_movements(self, actor: Optional[Actor], filters: Optional[dict] = None) -> list[Movement]:
        return self.movements.find_all(filters)

    def create_movement(self, actor: Optional[Actor], data: dict) -> Movement:
        ensure_admin(actor)
        return self.movements.create(data)

    def update_movement(self, actor: Optional[Actor], movement_id: int, data: dict) -> Movement:
        ensure_admin(actor)
        return self.movements.update(movement_id, data)

    def remove_movement(self, actor: Optional[Actor], movement_id: int) -> None:
        ensure_admin(actor)
        self.movements.remove(movement_id)

    def _ensure_owner_or_admin(self, actor: Optional[Actor], workout_id: int) -> None:
        ensure_logged_in(actor)
        workout = self.repo.find(workout_id)
        ensure_self_or_admin(actor, workout.create_by)
