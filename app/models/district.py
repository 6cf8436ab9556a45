from datetime import datetime

from beanie import Document, Indexed
from pydantic import BaseModel, Field


class District(Document):
    """Administrative district grouping several schools."""
    name: Indexed(str)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "districts"
        use_state_management = True


class DistrictCreate(BaseModel):
    name: str = Field(min_length=1)
