"""Profiles for admins, district heads and teachers."""
from datetime import datetime
from enum import Enum
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, EmailStr, Field, model_validator


class UserRole(str, Enum):
    ADMIN = "admin"
    HEAD = "head"
    TEACHER = "teacher"


class User(Document):
    """User document; teachers belong to a school, heads to a district."""

    email: Indexed(EmailStr, unique=True)
    hashed_password: str
    role: UserRole
    name: str
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    # Teacher-specific
    school_id: Optional[str] = None
    # Head-specific; teachers inherit the district of their school
    district_id: Optional[str] = None

    class Settings:
        name = "users"
        use_state_management = True


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8)
    role: UserRole
    name: str
    school_id: Optional[str] = None
    district_id: Optional[str] = None

    @model_validator(mode="after")
    def _check_scope(self):
        if self.role == UserRole.TEACHER and not self.school_id:
            raise ValueError("Teachers must be assigned a school_id")
        if self.role == UserRole.HEAD and not self.district_id:
            raise ValueError("District heads must be assigned a district_id")
        return self


class UserOut(BaseModel):
    id: str
    email: str
    role: UserRole
    name: str
    is_active: bool
    school_id: Optional[str] = None
    district_id: Optional[str] = None
