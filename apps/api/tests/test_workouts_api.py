"""Tests for the workout log endpoints."""
from datetime import datetime

import pytest

from models import Exercise, Workout
from services.workout_log import compute_total_volume
from schemas import ExerciseCreate, WorkoutSet
from fixtures.auth_fixtures import auth_headers_for


def _push_day(**overrides):
    body = {
        "name": "Push Day",
        "date": "2024-06-03T18:00:00",
        "duration": 2700,
        "exercises": [
            {
                "name": "Weighted Dips",
                "sets": [
                    {"reps": 10, "weight": 20, "rpe": 7, "completed": True},
                    {"reps": 8, "weight": 20, "rpe": 8, "completed": True},
                    {"reps": 5, "weight": 20, "rpe": 9, "completed": False},
                ],
            },
            {"name": "Push-Up", "sets": [{"reps": 20, "completed": True}]},
        ],
    }
    body.update(overrides)
    return body


class TestComputeTotalVolume:

    def test_counts_completed_sets_only(self):
        exercises = [
            ExerciseCreate(name="Row", sets=[
                WorkoutSet(reps=10, weight=30, completed=True),
                WorkoutSet(reps=10, weight=30, completed=False),
            ]),
        ]
        assert compute_total_volume(exercises) == 300

    def test_bodyweight_sets_add_nothing(self):
        exercises = [ExerciseCreate(name="Plank", sets=[WorkoutSet(reps=1, weight=None, completed=True)])]
        assert compute_total_volume(exercises) == 0


class TestWorkoutEndpoints:

    def test_requires_auth(self, client):
        assert client.post("/api/workouts", json=_push_day()).status_code == 401

    def test_create_derives_volume_and_orders_exercises(self, client, auth_headers, test_user):
        response = client.post("/api/workouts", json=_push_day(), headers=auth_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["userId"] == str(test_user.id)
        assert body["totalVolume"] == 360
        assert body["duration"] == 2700
        assert [e["name"] for e in body["exercises"]] == ["Weighted Dips", "Push-Up"]
        assert [e["order"] for e in body["exercises"]] == [0, 1]
        assert body["exercises"][0]["sets"][2] == {"reps": 5, "weight": 20, "rpe": 9, "completed": False}

    def test_explicit_total_volume_is_kept(self, client, auth_headers):
        response = client.post("/api/workouts", json=_push_day(totalVolume=1000), headers=auth_headers)
        assert response.json()["totalVolume"] == 1000

    @pytest.mark.parametrize(
        "overrides",
        [
            {"name": ""},
            {"duration": -5},
            {"exercises": [{"name": "Dips", "sets": [{"reps": 5, "rpe": 11}]}]},
            {"exercises": [{"name": "Dips", "sets": [{"reps": -1}]}]},
        ],
    )
    def test_invalid_workout_is_400(self, client, auth_headers, overrides):
        response = client.post("/api/workouts", json=_push_day(**overrides), headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_list_is_newest_first_and_scoped_to_user(self, client, auth_headers, db_session, other_user):
        client.post("/api/workouts", json=_push_day(name="Older", date="2024-06-01T08:00:00"), headers=auth_headers)
        client.post("/api/workouts", json=_push_day(name="Newer", date="2024-06-05T08:00:00"), headers=auth_headers)
        db_session.add(Workout(user_id=other_user.id, name="Not Mine", date=datetime(2024, 6, 10)))
        db_session.commit()

        response = client.get("/api/workouts", headers=auth_headers)

        assert [w["name"] for w in response.json()] == ["Newer", "Older"]

    def test_list_limit(self, client, auth_headers):
        for day in range(1, 4):
            client.post("/api/workouts", json=_push_day(name=f"Day {day}", date=f"2024-06-0{day}T08:00:00"), headers=auth_headers)

        response = client.get("/api/workouts?limit=2", headers=auth_headers)

        assert [w["name"] for w in response.json()] == ["Day 3", "Day 2"]

    def test_get_single_workout(self, client, auth_headers):
        created = client.post("/api/workouts", json=_push_day(), headers=auth_headers).json()

        response = client.get(f"/api/workouts/{created['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["name"] == "Push Day"

    def test_other_users_workout_is_404(self, client, auth_headers, other_user):
        created = client.post("/api/workouts", json=_push_day(), headers=auth_headers_for(other_user)).json()

        response = client.get(f"/api/workouts/{created['id']}", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    def test_missing_workout_is_404(self, client, auth_headers):
        assert client.get("/api/workouts/999999", headers=auth_headers).status_code == 404

    def test_patch_replaces_exercises_and_recomputes_volume(self, client, auth_headers, db_session):
        created = client.post("/api/workouts", json=_push_day(), headers=auth_headers).json()

        response = client.patch(
            f"/api/workouts/{created['id']}",
            json={
                "notes": "Felt strong",
                "exercises": [{"name": "Pike Push-Up", "sets": [{"reps": 8, "weight": 10, "completed": True}]}],
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Push Day"
        assert body["notes"] == "Felt strong"
        assert body["totalVolume"] == 80
        assert [e["name"] for e in body["exercises"]] == ["Pike Push-Up"]
        assert db_session.query(Exercise).filter(Exercise.workout_id == created["id"]).count() == 1

    def test_patch_with_null_name_keeps_name(self, client, auth_headers):
        created = client.post("/api/workouts", json=_push_day(), headers=auth_headers).json()

        response = client.patch(f"/api/workouts/{created['id']}", json={"name": None, "duration": 3000}, headers=auth_headers)

        assert response.json()["name"] == "Push Day"
        assert response.json()["duration"] == 3000
        assert response.json()["totalVolume"] == 360

    def test_patch_other_users_workout_is_404(self, client, auth_headers, other_user):
        created = client.post("/api/workouts", json=_push_day(), headers=auth_headers_for(other_user)).json()
        response = client.patch(f"/api/workouts/{created['id']}", json={"name": "Mine now"}, headers=auth_headers)
        assert response.status_code == 404
