from datetime import date, datetime, timedelta, timezone

import pytest

from liftlog.db.seed import default_exercise_id

BENCH = str(default_exercise_id("bench-press"))
SQUAT = str(default_exercise_id("squat"))


def today() -> date:
    return datetime.now(timezone.utc).date()


@pytest.fixture
def workout_id(alice_client):
    response = alice_client.post("/workouts", json={"date": today().isoformat(), "notes": "heavy"})
    assert response.status_code == 201
    return response.json()["id"]


def add_set(client, workout_id, exercise_id=BENCH, reps=5, weight=100.0, rpe=None):
    return client.post(
        f"/workouts/{workout_id}/logs",
        json={"exercise_id": exercise_id, "reps": reps, "weight": weight, "rpe": rpe},
    )


def test_pr_flags_follow_the_current_max(alice_client, workout_id):
    ids = {}
    for weight in (100, 110, 105):
        response = add_set(alice_client, workout_id, weight=weight)
        assert response.status_code == 201
        ids[weight] = response.json()["id"]

    logs = alice_client.get(f"/workouts/{workout_id}").json()["logs"]
    assert [(log["weight"], log["is_pr"]) for log in logs] == [(100, False), (110, True), (105, False)]

    assert alice_client.post(f"/workouts/{workout_id}/logs/{ids[110]}/delete").status_code == 200

    logs = alice_client.get(f"/workouts/{workout_id}").json()["logs"]
    assert [(log["weight"], log["is_pr"]) for log in logs] == [(100, False), (105, True)]
    prs = alice_client.get("/stats/prs").json()
    assert [(pr["exercise_name"], pr["value"]) for pr in prs] == [("Bench Press", 105)]


def test_set_numbers_count_per_exercise(alice_client, workout_id):
    numbers = [
        add_set(alice_client, workout_id, BENCH).json()["set_number"],
        add_set(alice_client, workout_id, BENCH).json()["set_number"],
        add_set(alice_client, workout_id, SQUAT).json()["set_number"],
        add_set(alice_client, workout_id, BENCH).json()["set_number"],
    ]
    assert numbers == [1, 2, 1, 3]


@pytest.mark.parametrize(
    "reps,weight,rpe",
    [(0, 100, None), (-1, 100, None), (1001, 100, None), (10**20, 100, None), (5, -2.5, None), (5, 100, 0), (5, 100, 11)],
)
def test_invalid_sets_are_rejected(alice_client, workout_id, reps, weight, rpe):
    response = add_set(alice_client, workout_id, reps=reps, weight=weight, rpe=rpe)
    assert response.status_code == 400
    assert alice_client.get(f"/workouts/{workout_id}").json()["logs"] == []


def test_bodyweight_set_with_rpe_is_accepted(alice_client, workout_id):
    response = add_set(alice_client, workout_id, reps=12, weight=0, rpe=8)
    assert response.status_code == 201
    assert response.json()["rpe"] == 8


def test_update_and_delete_workout(alice_client, workout_id):
    updated = alice_client.post(f"/workouts/{workout_id}", json={"notes": "lighter than planned"})
    assert updated.status_code == 200
    assert updated.json()["notes"] == "lighter than planned"

    add_set(alice_client, workout_id)
    assert alice_client.post(f"/workouts/{workout_id}/delete").status_code == 200
    assert alice_client.get(f"/workouts/{workout_id}").status_code == 404
    assert alice_client.get("/stats/prs").json() == []


def test_workout_list_is_paginated(alice_client):
    start = date(2025, 1, 1)
    for offset in range(25):
        alice_client.post("/workouts", json={"date": (start + timedelta(days=offset)).isoformat()})

    first = alice_client.get("/workouts").json()
    second = alice_client.get("/workouts", params={"page": 2}).json()
    beyond = alice_client.get("/workouts", params={"page": 99}).json()

    assert (first["page"], first["total_pages"], first["total"]) == (1, 2, 25)
    assert len(first["workouts"]) == 20
    assert first["workouts"][0]["date"] == "2025-01-25"
    assert len(second["workouts"]) == 5
    assert second["workouts"][-1]["date"] == "2025-01-01"
    assert beyond["page"] == 2


def test_share_and_revoke(alice_client, new_client, workout_id):
    add_set(alice_client, workout_id, weight=120)
    token = alice_client.post(f"/workouts/{workout_id}/share").json()["share_token"]
    assert alice_client.post(f"/workouts/{workout_id}/share").json()["share_token"] == token

    anonymous = new_client()
    shared = anonymous.get(f"/shared/{token}")
    assert shared.status_code == 200
    body = shared.json()
    assert body["username"] == "alice"
    assert body["notes"] == "heavy"
    assert [(log["weight"], log["is_pr"]) for log in body["logs"]] == [(120, True)]

    assert alice_client.post(f"/workouts/{workout_id}/share/revoke").status_code == 200
    gone = anonymous.get(f"/shared/{token}")
    assert gone.status_code == 404
    assert gone.json() == {"detail": "Shared workout not found"}


def test_custom_exercise_lifecycle(alice_client, workout_id):
    created = alice_client.post(
        "/exercises", json={"name": "Zercher Squat", "category": "legs", "equipment": "Barbell"}
    )
    assert created.status_code == 201
    exercise = created.json()
    assert exercise["is_default"] is False

    categories = alice_client.get("/exercises").json()
    assert [c["name"] for c in categories] == ["chest", "back", "legs", "shoulders", "arms", "core"]
    legs = next(c for c in categories if c["name"] == "legs")
    assert "Zercher Squat" in [e["name"] for e in legs["exercises"]]

    renamed = alice_client.post(f"/exercises/{exercise['id']}", json={"name": "Zercher"})
    assert renamed.json()["name"] == "Zercher"
    assert renamed.json()["category"] == "legs"

    add_set(alice_client, workout_id, exercise["id"])
    blocked = alice_client.post(f"/exercises/{exercise['id']}/delete")
    assert blocked.status_code == 409

    unused = alice_client.post("/exercises", json={"name": "Sissy Squat", "category": "legs"}).json()
    assert alice_client.post(f"/exercises/{unused['id']}/delete").status_code == 200
    assert alice_client.get(f"/exercises/{unused['id']}").status_code == 404


def test_unknown_category_is_rejected(alice_client):
    response = alice_client.post("/exercises", json={"name": "Cardio", "category": "cardio"})
    assert response.status_code == 422


def test_dashboard_and_stats(alice_client, workout_id):
    add_set(alice_client, workout_id, BENCH, reps=5, weight=100)
    add_set(alice_client, workout_id, SQUAT, reps=3, weight=140)
    alice_client.post("/workouts", json={"date": (today() - timedelta(days=20)).isoformat()})
    alice_client.post("/workouts", json={"date": (today() - timedelta(days=60)).isoformat()})

    dashboard = alice_client.get("/").json()
    assert dashboard["username"] == "alice"
    assert dashboard["workouts_this_week"] == 1
    assert dashboard["workouts_this_month"] == 2
    assert dashboard["volume_this_week"] == 5 * 100 + 3 * 140
    assert len(dashboard["recent_workouts"]) == 3
    assert {pr["exercise_name"] for pr in dashboard["recent_prs"]} == {"Bench Press", "Squat"}

    stats = alice_client.get("/stats").json()
    assert stats["total_workouts"] == 3
    assert len(stats["prs"]) == 2

    bench = alice_client.get(f"/stats/exercise/{BENCH}").json()
    assert bench["exercise"]["name"] == "Bench Press"
    assert bench["current_pr"]["value"] == 100
    assert [log["weight"] for log in bench["history"]] == [100]

    untouched = alice_client.get(f"/stats/exercise/{default_exercise_id('plank')}").json()
    assert untouched["current_pr"] is None
    assert untouched["history"] == []
