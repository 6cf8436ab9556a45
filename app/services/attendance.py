"""Turning a class's daily marks into idempotent attendance writes."""
from datetime import date, datetime, time
from typing import Any, Iterable

from pymongo import UpdateOne

from app.models.attendance import AttendanceMark, AttendanceRecord


def resolve_marks(student_ids: Iterable[str], marks: Iterable[AttendanceMark]) -> dict[str, bool]:
    """Presence for every enrolled student; unmarked students are absent.

    Raises ValueError naming the first mark for a student outside the class.
    """
    resolved = {sid: False for sid in student_ids}
    for mark in marks:
        if mark.student_id not in resolved:
            raise ValueError(f"Student {mark.student_id} is not enrolled in this class")
        resolved[mark.student_id] = mark.present
    return resolved


def attendance_upserts(
    students,
    presence: dict[str, bool],
    class_id: str,
    day: date,
    marked_by: str,
    now: datetime,
) -> list[tuple[dict[str, Any], dict[str, Any]]]:
    """(filter, update) pairs keyed on the unique (student_id, date) index."""
    # Beanie stores dates as midnight datetimes
    stored_day = datetime.combine(day, time.min)
    ops = []
    for student in students:
        student_id = str(student.id)
        ops.append((
            {"student_id": student_id, "date": stored_day},
            {
                "$set": {
                    "class_id": class_id,
                    "school_id": student.school_id,
                    "present": presence[student_id],
                    "marked_by": marked_by,
                    "marked_at": now,
                }
            },
        ))
    return ops


async def save_attendance(ops: list[tuple[dict[str, Any], dict[str, Any]]]) -> None:
    """Apply the upserts in one round trip.

    Concurrent submissions for the same day converge on one record per
    student instead of failing on the unique index.
    """
    if not ops:
        return
    collection = AttendanceRecord.get_motor_collection()
    await collection.bulk_write(
        [UpdateOne(filter_, update, upsert=True) for filter_, update in ops],
        ordered=False,
    )
