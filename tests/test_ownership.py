import uuid

import pytest

from liftlog.db.seed import default_exercise_id

BENCH = str(default_exercise_id("bench-press"))


@pytest.fixture
def alice_workout(alice_client):
    workout = alice_client.post("/workouts", json={"date": "2026-01-05", "notes": "push day"}).json()
    log = alice_client.post(
        f"/workouts/{workout['id']}/logs", json={"exercise_id": BENCH, "reps": 5, "weight": 100}
    ).json()
    return workout["id"], log["id"]


@pytest.fixture
def alice_exercise(alice_client):
    return alice_client.post("/exercises", json={"name": "Zercher Squat", "category": "legs"}).json()["id"]


def test_other_users_workout_is_not_found(bob_client, alice_client, alice_workout):
    workout_id, log_id = alice_workout

    attempts = [
        bob_client.get(f"/workouts/{workout_id}"),
        bob_client.post(f"/workouts/{workout_id}", json={"notes": "mine now"}),
        bob_client.post(f"/workouts/{workout_id}/delete"),
        bob_client.post(f"/workouts/{workout_id}/logs", json={"exercise_id": BENCH, "reps": 1, "weight": 1}),
        bob_client.post(f"/workouts/{workout_id}/logs/{log_id}", json={"reps": 1, "weight": 500}),
        bob_client.post(f"/workouts/{workout_id}/logs/{log_id}/delete"),
        bob_client.post(f"/workouts/{workout_id}/share"),
        bob_client.post(f"/workouts/{workout_id}/share/revoke"),
    ]

    for response in attempts:
        assert response.status_code == 404
        assert response.json() == {"detail": "Workout not found"}

    detail = alice_client.get(f"/workouts/{workout_id}").json()
    assert detail["notes"] == "push day"
    assert detail["share_token"] is None
    assert [(log["weight"], log["reps"]) for log in detail["logs"]] == [(100, 5)]


def test_missing_and_foreign_look_the_same(bob_client, alice_workout):
    workout_id, _ = alice_workout
    foreign = bob_client.get(f"/workouts/{workout_id}")
    missing = bob_client.get(f"/workouts/{uuid.uuid4()}")
    assert (foreign.status_code, foreign.json()) == (missing.status_code, missing.json())


def test_log_must_belong_to_the_workout(alice_client, alice_workout):
    _, log_id = alice_workout
    other = alice_client.post("/workouts", json={"date": "2026-01-06"}).json()

    response = alice_client.post(f"/workouts/{other['id']}/logs/{log_id}", json={"reps": 1, "weight": 1})

    assert response.status_code == 404
    assert response.json() == {"detail": "Log not found"}


def test_other_users_custom_exercise_is_hidden(bob_client, alice_exercise):
    assert bob_client.get(f"/exercises/{alice_exercise}").status_code == 404
    assert bob_client.post(f"/exercises/{alice_exercise}", json={"name": "Renamed"}).status_code == 404
    assert bob_client.post(f"/exercises/{alice_exercise}/delete").status_code == 404
    assert bob_client.get(f"/stats/exercise/{alice_exercise}").status_code == 404

    listed = [e["id"] for category in bob_client.get("/exercises").json() for e in category["exercises"]]
    assert alice_exercise not in listed


def test_cannot_log_someone_elses_exercise(bob_client, alice_exercise):
    workout = bob_client.post("/workouts", json={"date": "2026-01-05"}).json()

    response = bob_client.post(
        f"/workouts/{workout['id']}/logs", json={"exercise_id": alice_exercise, "reps": 5, "weight": 50}
    )

    assert response.status_code == 404
    assert response.json() == {"detail": "Exercise not found"}


def test_default_exercises_are_read_only(alice_client):
    assert alice_client.get(f"/exercises/{BENCH}").status_code == 200
    assert alice_client.post(f"/exercises/{BENCH}", json={"name": "Mine"}).status_code == 404
    assert alice_client.post(f"/exercises/{BENCH}/delete").status_code == 404
    assert alice_client.get(f"/exercises/{BENCH}").json()["name"] == "Bench Press"


def test_workout_lists_are_private(alice_client, bob_client, alice_workout):
    assert alice_client.get("/workouts").json()["total"] == 1
    assert bob_client.get("/workouts").json()["total"] == 0
    assert bob_client.get("/stats/prs").json() == []
