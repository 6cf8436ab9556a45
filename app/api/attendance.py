"""Daily class attendance: record, review and trigger at-risk detection."""
import logging
from datetime import date, datetime

from beanie.operators import In
from fastapi import APIRouter, HTTPException

from app.api.deps import CurrentUser
from app.api.scope import accessible_classes, class_students, district_of_school, get_class_in_scope
from app.models.attendance import AttendanceRecord, AttendanceSubmission, StudentDayStatus
from app.services.at_risk import flag_students
from app.services.attendance import attendance_upserts, resolve_marks, save_attendance

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/classes")
async def get_classes(user: CurrentUser):
    """Classes the caller may record or review attendance for."""
    classes = await accessible_classes(user)
    return [
        {"id": str(c.id), "name": c.name, "school_id": c.school_id, "teacher_id": c.teacher_id}
        for c in classes
    ]


@router.get("/classes/{class_id}/students")
async def get_students_for_class(class_id: str, user: CurrentUser):
    await get_class_in_scope(user, class_id)
    students = await class_students(class_id)
    return [{"id": str(s.id), "name": s.name, "class_id": s.class_id} for s in students]


@router.post("/record")
async def record_attendance(data: AttendanceSubmission, user: CurrentUser):
    """Save one day of attendance for a class, then flag at-risk students.

    Students left out of ``marks`` are recorded absent; re-submitting a day
    overwrites the earlier marks instead of duplicating them.
    """
    school_class = await get_class_in_scope(user, data.class_id)
    if data.date > date.today():
        raise HTTPException(status_code=400, detail="Attendance cannot be recorded for a future date")

    students = await class_students(data.class_id)
    try:
        presence = resolve_marks((str(s.id) for s in students), data.marks)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    await save_attendance(
        attendance_upserts(students, presence, data.class_id, data.date, str(user.id), datetime.utcnow())
    )
    present_count = sum(presence.values())

    logger.info(
        "Attendance for class %s on %s saved by %s: %d/%d present",
        data.class_id, data.date, user.id, present_count, len(students),
    )

    district_id = await district_of_school(school_class.school_id)
    new_alerts = await flag_students(students, district_id)

    return {
        "status": "success",
        "message": "Attendance recorded!",
        "date": data.date.isoformat(),
        "present": present_count,
        "absent": len(students) - present_count,
        "flagged": [a.student_id for a in new_alerts],
    }


@router.get("/classes/{class_id}/{date_str}", response_model=list[StudentDayStatus])
async def get_attendance_for_date(class_id: str, date_str: str, user: CurrentUser):
    """Each student's status on a date; unrecorded students come back as such."""
    await get_class_in_scope(user, class_id)
    try:
        d = date.fromisoformat(date_str)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format (YYYY-MM-DD)")

    students = await class_students(class_id)
    records = await AttendanceRecord.find(
        In(AttendanceRecord.student_id, [str(s.id) for s in students]),
        AttendanceRecord.date == d,
    ).to_list()
    by_student = {r.student_id: r.present for r in records}

    result = []
    for s in students:
        present = by_student.get(str(s.id))
        if present is None:
            status = "not_recorded"
        else:
            status = "present" if present else "absent"
        result.append(StudentDayStatus(student_id=str(s.id), name=s.name, present=present, status=status))
    return result
