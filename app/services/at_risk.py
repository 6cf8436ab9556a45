"""Dropout-risk detection and alert deduplication."""
import logging
from typing import Iterable, Optional, Sequence

from pymongo.errors import DuplicateKeyError

from app.config import settings
from app.models.alert import Alert
from app.models.attendance import AttendanceRecord
from app.models.student import Student
from app.services.analytics import AttendanceLike

logger = logging.getLogger(__name__)


def has_consecutive_absences(history: Sequence[AttendanceLike], threshold: int) -> bool:
    """True if ``history`` (ordered by date) holds ``threshold`` absences in a row.

    Any run counts, not only the most recent one.
    """
    if len(history) < threshold:
        return False
    consecutive = 0
    for record in history:
        if record.present:
            consecutive = 0
            continue
        consecutive += 1
        if consecutive >= threshold:
            return True
    return False


def alert_reason(threshold: int) -> str:
    return f"Missed {threshold} consecutive days"


async def flag_if_at_risk(student: Student, district_id: Optional[str]) -> Optional[Alert]:
    """Create an alert for ``student`` if at risk and not yet flagged.

    Returns the new alert, or None when the student is fine or already flagged.
    """
    threshold = settings.at_risk_threshold
    student_id = str(student.id)
    history = (
        await AttendanceRecord.find(AttendanceRecord.student_id == student_id)
        .sort("date")
        .to_list()
    )
    if not has_consecutive_absences(history, threshold):
        return None

    existing = await Alert.find_one(Alert.student_id == student_id)
    if existing:
        return None

    alert = Alert(
        student_id=student_id,
        reason=alert_reason(threshold),
        school_id=student.school_id,
        district_id=district_id,
    )
    try:
        await alert.insert()
    except DuplicateKeyError:
        # Flagged concurrently by another submission
        logger.info("Alert for student %s already exists", student_id)
        return None
    logger.info("Student %s flagged at risk: %s", student_id, alert.reason)
    return alert


async def flag_students(students: Iterable[Student], district_id: Optional[str]) -> list[Alert]:
    """Run detection for each student, in order; returns newly created alerts."""
    created = []
    for student in students:
        alert = await flag_if_at_risk(student, district_id)
        if alert:
            created.append(alert)
    return created
