from datetime import date, datetime
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, Field
from pymongo import ASCENDING, IndexModel


class AttendanceRecord(Document):
    """One student's presence on one school day."""
    student_id: Indexed(str)
    class_id: Indexed(str)
    school_id: str
    date: Indexed(date)
    present: bool
    marked_by: str  # user_id
    marked_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "attendance_records"
        use_state_management = True
        indexes = [
            IndexModel([("student_id", ASCENDING), ("date", ASCENDING)], unique=True),
        ]


class AttendanceMark(BaseModel):
    student_id: str
    present: bool


class AttendanceSubmission(BaseModel):
    class_id: str
    date: date
    # Students of the class that are missing here are recorded absent
    marks: list[AttendanceMark] = Field(default_factory=list)


class StudentDayStatus(BaseModel):
    student_id: str
    name: str
    present: Optional[bool] = None  # None means not recorded
    status: str
