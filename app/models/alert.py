"""Dropout-risk alerts raised after consecutive absences."""
from datetime import datetime
from typing import Optional

from beanie import Document, Indexed
from pydantic import Field


class Alert(Document):
    """At most one alert per student; the unique index backs deduplication."""

    student_id: Indexed(str, unique=True)
    reason: str
    school_id: Indexed(str)
    district_id: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "alerts"
        use_state_management = True
