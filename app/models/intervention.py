from datetime import datetime
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, Field, field_validator

DEFAULT_INTERVENTION_TYPE = "dropout_prevention"


class Intervention(Document):
    """Remedial action logged against an alert."""
    student_id: Indexed(str)
    alert_id: Indexed(str)
    teacher_id: str
    intervention_type: str = DEFAULT_INTERVENTION_TYPE
    description: str
    outcome: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "interventions"
        use_state_management = True


class InterventionCreate(BaseModel):
    alert_id: str
    description: str
    intervention_type: str = DEFAULT_INTERVENTION_TYPE
    outcome: Optional[str] = None

    @field_validator("description")
    @classmethod
    def validate_description(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Please enter intervention details")
        return value
