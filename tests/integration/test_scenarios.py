"""End-to-end behaviour of the repositories and services against PostgreSQL."""

import pytest

from errors import DuplicateError, NotFoundError
from repositories.family_repo import FamilyRepository
from repositories.membership_repo import MembershipRepository
from repositories.movement_repo import MovementRepository
from repositories.result_repo import ResultRepository
from repositories.user_repo import UserRepository
from repositories.workout_repo import WorkoutRepository
from services.membership_service import MembershipService

pytestmark = pytest.mark.integration


def make_user(email="ann@example.com"):
    return UserRepository().create({
        "email": email,
        "password": "not-a-real-hash",
        "first_name": "Ann",
        "last_name": "Lee",
    })


def make_family(name="Lees"):
    return FamilyRepository().create({"family_name": name})


# ---------------------------------------------------------------------------
# memberships
# ---------------------------------------------------------------------------


def test_duplicate_membership_is_rejected():
    user, family = make_user(), make_family()
    repo = MembershipRepository()
    repo.create({"user_id": user.id, "family_id": family.id})

    with pytest.raises(DuplicateError, match=f"already a member of family: {family.id}"):
        repo.create({"user_id": user.id, "family_id": family.id})
    assert len(repo.find_all({"family_id": family.id})) == 1


def test_membership_for_missing_user_names_the_user():
    family = make_family()

    with pytest.raises(NotFoundError, match="No user: 999"):
        MembershipRepository().create({"user_id": 999, "family_id": family.id})


def test_update_and_remove_missing_records():
    with pytest.raises(NotFoundError):
        UserRepository().update(404, {"bio": "x"})
    with pytest.raises(NotFoundError):
        FamilyRepository().remove(404)
    with pytest.raises(NotFoundError):
        ResultRepository().update(404, {"score": "1"})


def test_membership_update_sets_modify_date():
    user, family = make_user(), make_family()
    repo = MembershipRepository()
    created = repo.create({"user_id": user.id, "family_id": family.id})

    updated = repo.update(user.id, family.id, {"mem_status": "inactive"})

    assert created.modify_date is None
    assert updated.mem_status == "inactive"
    assert len(updated.modify_date) == 8


def test_is_member_end_to_end():
    ann, bob = make_user(), make_user("bob@example.com")
    family = make_family()
    MembershipRepository().create({"user_id": ann.id, "family_id": family.id})
    service = MembershipService()

    assert service.is_member(ann.id, family.id)
    assert not service.is_member(bob.id, family.id)

    MembershipRepository().remove(ann.id, family.id)
    assert not service.is_member(ann.id, family.id)


# ---------------------------------------------------------------------------
# workout search
# ---------------------------------------------------------------------------


def test_movement_filter_requires_every_movement():
    movements = MovementRepository()
    thruster = movements.create({"movement_name": "Thruster"})
    pull_up = movements.create({"movement_name": "Pull-up"})
    row = movements.create({"movement_name": "Row"})
    workouts = WorkoutRepository()
    fran = workouts.create({"name": "Fran", "movement_ids": [thruster.id, pull_up.id]})
    workouts.create({"name": "Thrusters only", "movement_ids": [thruster.id]})
    workouts.create({"name": "Pull and row", "movement_ids": [pull_up.id, row.id]})

    found = workouts.find_all({"movement_ids": [thruster.id, pull_up.id]})

    assert [w.id for w in found] == [fran.id]
    assert {m.movement_name for m in workouts.find(fran.id).movements} == {"Thruster", "Pull-up"}


def test_keyword_matches_name_or_description_within_filters():
    workouts = WorkoutRepository()
    by_name = workouts.create({"name": "Push Press Ladder", "category": "wod"})
    by_description = workouts.create({"name": "Strict", "description": "press and pull", "category": "wod"})
    workouts.create({"name": "Press", "category": "girls"})
    workouts.create({"name": "Row", "category": "wod"})

    found = workouts.find_all({"category": "wod", "keyword": "press"})

    assert {w.id for w in found} == {by_name.id, by_description.id}


# ---------------------------------------------------------------------------
# dates
# ---------------------------------------------------------------------------


def test_complete_date_read_back_as_utc_day():
    user, family = make_user(), make_family()
    workout = WorkoutRepository().create({"name": "Fran"})
    MembershipRepository().create({"user_id": user.id, "family_id": family.id})

    result = ResultRepository().create({
        "user_id": user.id,
        "family_id": family.id,
        "workout_id": workout.id,
        "score": "4:12",
        "complete_date": "2024-03-05T10:00:00Z",
    })

    assert result.complete_date == "20240305"
    assert [r.id for r in ResultRepository().find_all({"complete_date": "2024-03-05"})] == [result.id]


def test_removing_user_keeps_their_workouts():
    user = make_user()
    workout = WorkoutRepository().create({"name": "Cindy", "create_by": user.id})

    UserRepository().remove(user.id)

    assert WorkoutRepository().find(workout.id).create_by is None
    with pytest.raises(NotFoundError):
        UserRepository().find(user.id)
