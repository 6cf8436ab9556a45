from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from app.api import reports
from app.api.deps import get_current_role, get_current_user
from app.main import app


@pytest.fixture
def client(admin):
    """Authenticated as an admin whose role may view reports."""
    role = SimpleNamespace(is_active=True, permissions={"reports": SimpleNamespace(view=True)})

    async def current_user():
        return admin

    async def current_role():
        return role

    app.dependency_overrides[get_current_user] = current_user
    app.dependency_overrides[get_current_role] = current_role
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.mark.parametrize(
    "path",
    ["/api/reports/summary/export?class_id=c1&format=pdf", "/api/reports/classes/c1/export?format=xls"],
)
def test_export_rejects_unknown_format(client, path):
    response = client.get(path)
    assert response.status_code == 422
    assert response.json()["detail"][0]["loc"][-1] == "format"


def test_class_export_without_students_is_not_found(monkeypatch, admin):
    async def get_class_in_scope(user, class_id):
        return SimpleNamespace(id=class_id, name="P4 Blue", school_id="school-1")

    async def class_students(class_id):
        return []

    monkeypatch.setattr(reports, "get_class_in_scope", get_class_in_scope)
    monkeypatch.setattr(reports, "class_students", class_students)
    with pytest.raises(HTTPException) as exc:
        asyncio.run(reports.export_class("c1", admin, "csv"))
    assert exc.value.status_code == 404
    assert exc.value.detail == "No students found in this class"
