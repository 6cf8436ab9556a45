"""HTTP-level checks that are answered before any database access."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from app.api.deps import create_refresh_token
from app.main import app
from app.models.intervention import DEFAULT_INTERVENTION_TYPE, InterventionCreate

client = TestClient(app)


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "app": "Komeza Wige"}


@pytest.mark.parametrize(
    "path",
    ["/api/dashboard/", "/api/attendance/classes", "/api/reports/overview", "/api/students/", "/api/auth/me"],
)
def test_protected_routes_require_token(path):
    response = client.get(path)
    assert response.status_code == 401
    assert response.json()["detail"] == "Not authenticated"


def test_garbage_token_rejected():
    response = client.get("/api/dashboard/", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_refresh_token_cannot_be_used_as_bearer():
    token = create_refresh_token("64b7f0c2a1b2c3d4e5f60718")
    response = client.get("/api/alerts/", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token type"


def test_login_validation_error_shape():
    response = client.post("/api/auth/login", json={"email": "a@example.com"})
    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail[0]["loc"][-1] == "password"


def test_intervention_requires_description():
    with pytest.raises(ValidationError):
        InterventionCreate(alert_id="a1", description="   ")
    data = InterventionCreate(alert_id="a1", description="  Called parent  ")
    assert data.description == "Called parent"
    assert data.intervention_type == DEFAULT_INTERVENTION_TYPE
