"""Tests for the exercise library and saved-template endpoints."""
import pytest

from models import Workout, WorkoutTemplate, WorkoutTemplateExercise
from services.workout_log import TEMPLATE_SET_RPE


def _make_template(db, user, library, name="Pull Basics", is_public=False):
    template = WorkoutTemplate(
        user_id=user.id,
        name=name,
        description="Rows then assisted pull-ups",
        difficulty="beginner",
        category="pull",
        is_public=is_public,
    )
    template.exercises = [
        WorkoutTemplateExercise(
            exercise_id=library["australian-row"].id, order_index=0,
            default_sets=3, default_reps=12, default_rest_seconds=60,
        ),
        WorkoutTemplateExercise(
            exercise_id=library["pull-up-assisted"].id, order_index=1,
            default_sets=2, default_reps=6, default_rest_seconds=90, notes="Slow negatives",
        ),
    ]
    db.add(template)
    db.commit()
    return template


class TestExerciseLibrary:

    def test_requires_auth(self, client):
        assert client.get("/api/exercises").status_code == 401

    def test_lists_library(self, client, auth_headers, exercise_library):
        response = client.get("/api/exercises", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert len(body) == len(exercise_library)
        assert body[0] == {
            "id": exercise_library["bodyweight-squat"].id,
            "slug": "bodyweight-squat",
            "name": "Bodyweight Squat",
            "category": "legs",
            "difficulty": "beginner",
        }


class TestTemplates:

    def test_list_own_templates(self, client, auth_headers, db_session, test_user, other_user, exercise_library):
        _make_template(db_session, test_user, exercise_library)
        _make_template(db_session, other_user, exercise_library, name="Theirs", is_public=True)

        response = client.get("/api/templates", headers=auth_headers)

        assert [t["name"] for t in response.json()] == ["Pull Basics"]

    def test_get_template_with_exercise_details(self, client, auth_headers, db_session, test_user, exercise_library):
        template = _make_template(db_session, test_user, exercise_library)

        response = client.get(f"/api/templates/{template.id}", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["isPublic"] is False
        assert [e["exerciseSlug"] for e in body["exercises"]] == ["australian-row", "pull-up-assisted"]
        assert body["exercises"][1]["exerciseName"] == "Assisted Pull-Up"
        assert body["exercises"][1]["defaultRestSeconds"] == 90
        assert body["exercises"][1]["notes"] == "Slow negatives"

    def test_public_template_of_another_user_is_visible(self, client, auth_headers, db_session, other_user, exercise_library):
        template = _make_template(db_session, other_user, exercise_library, is_public=True)
        assert client.get(f"/api/templates/{template.id}", headers=auth_headers).status_code == 200

    def test_private_template_of_another_user_is_404(self, client, auth_headers, db_session, other_user, exercise_library):
        template = _make_template(db_session, other_user, exercise_library)

        response = client.get(f"/api/templates/{template.id}", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    def test_start_template_creates_prefilled_workout(self, client, auth_headers, db_session, test_user, exercise_library):
        template = _make_template(db_session, test_user, exercise_library)

        response = client.post(f"/api/templates/{template.id}/start", headers=auth_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Pull Basics"
        assert body["totalVolume"] == 0
        assert [e["name"] for e in body["exercises"]] == ["Australian Row", "Assisted Pull-Up"]
        first_sets = body["exercises"][0]["sets"]
        assert len(first_sets) == 3
        assert all(s["reps"] == 12 and s["rpe"] == TEMPLATE_SET_RPE and s["completed"] is False for s in first_sets)
        assert len(body["exercises"][1]["sets"]) == 2
        assert db_session.query(Workout).filter(Workout.user_id == test_user.id).count() == 1

    def test_start_missing_template_is_404(self, client, auth_headers):
        assert client.post("/api/templates/424242/start", headers=auth_headers).status_code == 404
