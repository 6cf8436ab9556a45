import os
from types import SimpleNamespace

import pytest

# Settings are read at import time; make them valid before any app import.
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("AT_RISK_THRESHOLD", "3")

from app.models.user import UserRole  # noqa: E402


@pytest.fixture
def teacher():
    return SimpleNamespace(id="teacher-1", role=UserRole.TEACHER, school_id="school-1", district_id=None)


@pytest.fixture
def head():
    return SimpleNamespace(id="head-1", role=UserRole.HEAD, school_id=None, district_id="district-1")


@pytest.fixture
def admin():
    return SimpleNamespace(id="admin-1", role=UserRole.ADMIN, school_id=None, district_id=None)
