from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from fastapi import HTTPException
from jose import jwt
from pydantic import ValidationError

from app.api.deps import (
    create_access_token,
    create_refresh_token,
    decode_token,
    get_password_hash,
    parse_object_id,
    verify_password,
)
from app.config import Settings, settings
from app.models.user import UserCreate, UserRole


def test_password_hash_round_trip():
    hashed = get_password_hash("s3cret-pass")
    assert hashed != "s3cret-pass"
    assert verify_password("s3cret-pass", hashed)
    assert not verify_password("wrong", hashed)


def test_access_token_carries_subject_and_role():
    token = create_access_token("abc123", "teacher")
    payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    assert payload["role"] == "teacher"
    assert decode_token(token, "access") == "abc123"


def test_refresh_token_is_not_an_access_token():
    token = create_refresh_token("abc123")
    assert decode_token(token, "refresh") == "abc123"
    with pytest.raises(HTTPException) as exc:
        decode_token(token, "access")
    assert exc.value.status_code == 401


def test_expired_token_rejected():
    expired = jwt.encode(
        {"sub": "abc123", "type": "access", "exp": datetime.utcnow() - timedelta(minutes=1)},
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )
    with pytest.raises(HTTPException) as exc:
        decode_token(expired, "access")
    assert exc.value.detail == "Invalid or expired token"


def test_malformed_object_id_is_not_found():
    with pytest.raises(HTTPException) as exc:
        parse_object_id("not-an-id", "Student")
    assert exc.value.status_code == 404
    assert exc.value.detail == "Student not found"


def test_teacher_requires_school():
    with pytest.raises(ValidationError):
        UserCreate(email="t@example.com", password="long-enough", role=UserRole.TEACHER, name="T")
    user = UserCreate(
        email="t@example.com", password="long-enough", role=UserRole.TEACHER, name="T", school_id="s1"
    )
    assert user.school_id == "s1"


def test_head_requires_district():
    with pytest.raises(ValidationError):
        UserCreate(email="h@example.com", password="long-enough", role=UserRole.HEAD, name="H")


def test_placeholder_secret_rejected_outside_debug():
    with pytest.raises(ValidationError):
        Settings(debug=False, jwt_secret_key="change-me-in-production")
    assert Settings(debug=False, jwt_secret_key="x" * 32).at_risk_threshold == 3
