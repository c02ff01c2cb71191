"""
Security Tests: every /api route requires a bearer token.

Also checks that tokens for deleted users, expired tokens and malformed
subjects are rejected with 401, and that protective headers are present.
"""
from datetime import timedelta
from uuid import uuid4

import pytest

from core.security import create_access_token


PROTECTED_ROUTES = [
    ("post", "/api/coach/chat", {"message": "hi"}),
    ("get", "/api/coach/suggestions", None),
    ("post", "/api/coach/generate-template", {"goal": "strength"}),
    ("post", "/api/workouts", {"name": "Legs"}),
    ("get", "/api/workouts", None),
    ("get", "/api/workouts/1", None),
    ("patch", "/api/workouts/1", {"name": "Legs"}),
    ("get", "/api/journal", None),
    ("post", "/api/journal", {"content": "ok", "mood": 5, "energyLevel": 5}),
    ("get", "/api/exercises", None),
    ("get", "/api/templates", None),
    ("get", "/api/templates/1", None),
    ("post", "/api/templates/1/start", None),
]


def _call(client, method, path, body, headers=None):
    kwargs = {"headers": headers or {}}
    if body is not None:
        kwargs["json"] = body
    return getattr(client, method)(path, **kwargs)


@pytest.mark.parametrize("method, path, body", PROTECTED_ROUTES)
def test_route_requires_auth(client, method, path, body):
    response = _call(client, method, path, body)
    assert response.status_code == 401, f"Expected 401, got {response.status_code}"
    assert response.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.parametrize("method, path, body", PROTECTED_ROUTES)
def test_token_for_unknown_user_is_rejected(client, method, path, body):
    token = create_access_token({"sub": str(uuid4())})
    response = _call(client, method, path, body, {"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_expired_token_is_rejected(client, test_user):
    token = create_access_token({"sub": str(test_user.id)}, expires_delta=timedelta(minutes=-1))
    response = client.get("/api/journal", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_non_uuid_subject_is_rejected(client):
    token = create_access_token({"sub": "42"})
    response = client.get("/api/journal", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid user ID format"


def test_token_without_subject_is_rejected(client):
    token = create_access_token({"role": "member"})
    response = client.get("/api/journal", headers={"Authorization": f"Bearer {token}"})
    assert response.json()["error"] == "Invalid token payload"


class TestPublicEndpoints:

    def test_ping(self, client):
        assert client.get("/ping").json() == {"pong": True}

    def test_health_reports_database_and_coach_configuration(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert "coach_configured" in body

    def test_security_headers_are_set(self, client):
        response = client.get("/ping")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert "X-Process-Time" in response.headers
