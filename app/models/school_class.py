from datetime import datetime
from typing import Optional
from beanie import Document, Indexed
from pydantic import BaseModel, Field

class SchoolClass(Document):
    """Class within a school (e.g. P4 Blue), taught by one teacher."""
    name: str
    school_id: Indexed(str)
    teacher_id: Optional[str] = None  # user id of the assigned teacher
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "classes"
        use_state_management = True


class SchoolClassCreate(BaseModel):
    name: str = Field(min_length=1)
    school_id: str
    teacher_id: Optional[str] = None


class SchoolClassUpdate(BaseModel):
    name: Optional[str] = None
    teacher_id: Optional[str] = None
