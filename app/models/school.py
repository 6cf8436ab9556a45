from datetime import datetime

from beanie import Document, Indexed
from pydantic import BaseModel, Field


class School(Document):
    """School within a district."""
    name: str
    district_id: Indexed(str)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "schools"
        use_state_management = True


class SchoolCreate(BaseModel):
    name: str = Field(min_length=1)
    district_id: str
