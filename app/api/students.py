"""Student directory and per-student attendance profile."""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, HTTPException

from app.api.deps import AdminOnly, CurrentUser, parse_object_id
from app.api.interventions import intervention_out
from app.api.scope import accessible_students, class_names, get_student_in_scope, school_names
from app.config import settings
from app.models.alert import Alert
from app.models.attendance import AttendanceRecord
from app.models.intervention import Intervention
from app.models.school_class import SchoolClass
from app.models.student import Student, StudentCreate, StudentUpdate
from app.services.analytics import attendance_rate, risk_level

router = APIRouter()


def _student_out(s: Student, classes: dict[str, str], schools: dict[str, str]) -> dict:
    return {
        "id": str(s.id),
        "name": s.name,
        "class_id": s.class_id,
        "class_name": classes.get(s.class_id),
        "school_id": s.school_id,
        "school_name": schools.get(s.school_id),
        "is_active": s.is_active,
    }


async def _get_class(class_id: str) -> SchoolClass:
    school_class = await SchoolClass.get(parse_object_id(class_id, "Class"))
    if not school_class:
        raise HTTPException(status_code=404, detail="Class not found")
    return school_class


@router.get("/")
async def list_students(
    user: CurrentUser,
    school_id: Optional[str] = None,
    class_id: Optional[str] = None,
):
    students = await accessible_students(user, school_id=school_id, class_id=class_id)
    classes = await class_names([s.class_id for s in students])
    schools = await school_names([s.school_id for s in students])
    return [_student_out(s, classes, schools) for s in students]


@router.get("/{student_id}")
async def get_student_profile(student_id: str, user: CurrentUser):
    """Details, recent attendance, alerts and interventions of one student."""
    student = await get_student_in_scope(user, student_id)
    sid = str(student.id)

    history = (
        await AttendanceRecord.find(AttendanceRecord.student_id == sid)
        .sort("-date")
        .limit(settings.attendance_history_limit)
        .to_list()
    )
    alerts = await Alert.find(Alert.student_id == sid).sort("-created_at").to_list()
    interventions = await Intervention.find(Intervention.student_id == sid).sort("-created_at").to_list()
    rate = attendance_rate(history)

    classes = await class_names([student.class_id])
    schools = await school_names([student.school_id])
    return {
        "student": _student_out(student, classes, schools),
        "attendance_rate": rate,
        "risk_level": risk_level(rate),
        "attendance_history": [
            {"date": r.date.isoformat(), "present": r.present} for r in history
        ],
        "alerts": [
            {"id": str(a.id), "reason": a.reason, "created_at": a.created_at.isoformat()}
            for a in alerts
        ],
        "interventions": [intervention_out(i) for i in interventions],
    }


@router.post("/", status_code=201)
async def create_student(data: StudentCreate, admin: AdminOnly):
    school_class = await _get_class(data.class_id)
    s = Student(name=data.name.strip(), class_id=data.class_id, school_id=school_class.school_id)
    await s.insert()
    return {"id": str(s.id), "name": s.name, "class_id": s.class_id, "school_id": s.school_id}


@router.patch("/{student_id}")
async def update_student(student_id: str, data: StudentUpdate, admin: AdminOnly):
    s = await Student.get(parse_object_id(student_id, "Student"))
    if not s:
        raise HTTPException(status_code=404, detail="Student not found")
    update = data.model_dump(exclude_unset=True)
    if update.get("name"):
        s.name = update["name"].strip()
    if update.get("class_id"):
        school_class = await _get_class(update["class_id"])
        s.class_id = update["class_id"]
        s.school_id = school_class.school_id
    if update.get("is_active") is not None:
        s.is_active = update["is_active"]
    s.updated_at = datetime.utcnow()
    await s.save()
    return {"id": str(s.id), "name": s.name, "class_id": s.class_id, "school_id": s.school_id, "is_active": s.is_active}


@router.delete("/{student_id}")
async def deactivate_student(student_id: str, admin: AdminOnly):
    """Soft delete: attendance and alerts stay for reporting."""
    s = await Student.get(parse_object_id(student_id, "Student"))
    if not s:
        raise HTTPException(status_code=404, detail="Student not found")
    s.is_active = False
    s.updated_at = datetime.utcnow()
    await s.save()
    return {"id": str(s.id), "is_active": False}
