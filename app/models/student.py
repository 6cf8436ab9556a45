"""Student enrolment: which class and school a child belongs to."""
from datetime import datetime
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, Field


class Student(Document):
    """Student document; attendance lives in AttendanceRecord."""

    name: str
    class_id: Indexed(str)
    school_id: Indexed(str)
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "students"
        use_state_management = True


class StudentCreate(BaseModel):
    name: str = Field(min_length=1)
    class_id: str


class StudentUpdate(BaseModel):
    """All fields optional for PATCH; school follows the class."""
    name: Optional[str] = None
    class_id: Optional[str] = None
    is_active: Optional[bool] = None
