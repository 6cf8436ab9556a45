"""JWT-based stateless authentication."""
import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from app.api.deps import (
    CurrentUser,
    create_access_token,
    create_refresh_token,
    decode_token,
    parse_object_id,
    verify_password,
)
from app.api.scope import accessible_classes, district_for_user
from app.models.school import School
from app.models.user import User, UserRole
from app.rbac import DEFAULT_PAGE_BY_ROLE

logger = logging.getLogger(__name__)

router = APIRouter()


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class LoginRequest(BaseModel):
    email: str
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str


def _issue_tokens(user: User) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(str(user.id), user.role.value),
        refresh_token=create_refresh_token(str(user.id)),
    )


@router.post("/login", response_model=TokenResponse)
async def login(req: LoginRequest):
    user = await User.find_one(User.email == req.email.strip().lower())
    if not user or not user.is_active or not verify_password(req.password, user.hashed_password):
        logger.info("Failed login for %s", req.email)
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return _issue_tokens(user)


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(req: RefreshRequest):
    user_id = decode_token(req.refresh_token, "refresh")
    user = await User.get(parse_object_id(user_id, "User"))
    if not user or not user.is_active:
        raise HTTPException(status_code=401, detail="User not found or inactive")
    return _issue_tokens(user)


@router.get("/me")
async def me(user: CurrentUser):
    """Profile with the school, district and (for teachers) classes taught."""
    school = None
    if user.school_id:
        school = await School.get(parse_object_id(user.school_id, "School"))
    district = await district_for_user(user)

    classes_taught = []
    if user.role == UserRole.TEACHER:
        classes_taught = [c.name for c in await accessible_classes(user)]

    return {
        "id": str(user.id),
        "email": user.email,
        "name": user.name,
        "role": user.role.value,
        "school_id": user.school_id,
        "district_id": user.district_id or (district and str(district.id)),
        "school_name": school.name if school else None,
        "district_name": district.name if district else None,
        "classes_taught": classes_taught,
        "default_page": DEFAULT_PAGE_BY_ROLE[user.role.value],
    }
