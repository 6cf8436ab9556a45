"""User management (admin)."""
from datetime import datetime

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from app.api.deps import AdminOnly, get_password_hash, parse_object_id
from app.models.district import District
from app.models.school import School
from app.models.user import User, UserCreate, UserOut

router = APIRouter()


class PasswordUpdate(BaseModel):
    password: str = Field(min_length=8)


def _user_out(u: User) -> UserOut:
    return UserOut(
        id=str(u.id),
        email=u.email,
        role=u.role,
        name=u.name,
        is_active=u.is_active,
        school_id=u.school_id,
        district_id=u.district_id,
    )


@router.get("/", response_model=list[UserOut])
async def list_users(admin: AdminOnly):
    users = await User.find_all().sort("name").to_list()
    return [_user_out(u) for u in users]


@router.post("/", status_code=201, response_model=UserOut)
async def create_user(data: UserCreate, admin: AdminOnly):
    email = data.email.lower()
    existing = await User.find_one(User.email == email)
    if existing:
        raise HTTPException(status_code=400, detail="Email already registered")
    if data.school_id and not await School.get(parse_object_id(data.school_id, "School")):
        raise HTTPException(status_code=404, detail="School not found")
    if data.district_id and not await District.get(parse_object_id(data.district_id, "District")):
        raise HTTPException(status_code=404, detail="District not found")
    u = User(
        email=email,
        hashed_password=get_password_hash(data.password),
        role=data.role,
        name=data.name,
        school_id=data.school_id,
        district_id=data.district_id,
    )
    await u.insert()
    return _user_out(u)


@router.post("/{user_id}/set-password")
async def set_user_password(user_id: str, data: PasswordUpdate, admin: AdminOnly):
    """Set or reset a user's password (admin-only)."""
    u = await User.get(parse_object_id(user_id, "User"))
    if not u:
        raise HTTPException(status_code=404, detail="User not found")
    u.hashed_password = get_password_hash(data.password)
    u.updated_at = datetime.utcnow()
    await u.save()
    return {"id": str(u.id)}
