"""Data scoping: which schools, classes, students and alerts a user may see.

Admins see everything, district heads see every school of their district and
teachers see the classes they teach (and, for alerts, their own school).
"""
from typing import Optional

from beanie.operators import In
from fastapi import HTTPException

from app.api.deps import parse_object_id
from app.models.alert import Alert
from app.models.attendance import AttendanceRecord
from app.models.district import District
from app.models.school import School
from app.models.school_class import SchoolClass
from app.models.student import Student
from app.models.user import User, UserRole


def school_in_scope(user: User, school: School) -> bool:
    if user.role == UserRole.ADMIN:
        return True
    if user.role == UserRole.HEAD:
        return bool(user.district_id) and school.district_id == user.district_id
    return str(school.id) == user.school_id


def class_in_scope(user: User, school_class: SchoolClass, district_id: Optional[str]) -> bool:
    """``district_id`` is the district of the class's school."""
    if user.role == UserRole.ADMIN:
        return True
    if user.role == UserRole.HEAD:
        return bool(user.district_id) and district_id == user.district_id
    return school_class.school_id == user.school_id and school_class.teacher_id == str(user.id)


def alert_in_scope(user: User, alert: Alert) -> bool:
    if user.role == UserRole.ADMIN:
        return True
    if user.role == UserRole.HEAD:
        return bool(user.district_id) and alert.district_id == user.district_id
    return alert.school_id == user.school_id


async def accessible_schools(user: User) -> list[School]:
    if user.role == UserRole.ADMIN:
        return await School.find_all().sort("name").to_list()
    if user.role == UserRole.HEAD:
        if not user.district_id:
            return []
        return await School.find(School.district_id == user.district_id).sort("name").to_list()
    if not user.school_id:
        return []
    school = await School.get(parse_object_id(user.school_id, "School"))
    return [school] if school else []


async def accessible_classes(user: User, school_id: Optional[str] = None) -> list[SchoolClass]:
    if user.role == UserRole.TEACHER:
        if not user.school_id or (school_id and school_id != user.school_id):
            return []
        return await SchoolClass.find(
            SchoolClass.school_id == user.school_id,
            SchoolClass.teacher_id == str(user.id),
        ).sort("name").to_list()

    school_ids = [str(s.id) for s in await accessible_schools(user)]
    if school_id:
        school_ids = [sid for sid in school_ids if sid == school_id]
    if not school_ids:
        return []
    return await SchoolClass.find(In(SchoolClass.school_id, school_ids)).sort("name").to_list()


async def accessible_students(
    user: User,
    school_id: Optional[str] = None,
    class_id: Optional[str] = None,
) -> list[Student]:
    classes = await accessible_classes(user, school_id=school_id)
    class_ids = [str(c.id) for c in classes]
    if class_id:
        class_ids = [cid for cid in class_ids if cid == class_id]
    if not class_ids:
        return []
    return await Student.find(
        In(Student.class_id, class_ids), Student.is_active == True
    ).sort("name").to_list()


async def district_of_school(school_id: str) -> Optional[str]:
    school = await School.get(parse_object_id(school_id, "School"))
    return school.district_id if school else None


async def district_for_user(user: User) -> Optional[District]:
    """A head's own district, or the district of a teacher's school."""
    district_id = user.district_id
    if not district_id and user.school_id:
        district_id = await district_of_school(user.school_id)
    if not district_id:
        return None
    return await District.get(parse_object_id(district_id, "District"))


async def get_class_in_scope(user: User, class_id: str) -> SchoolClass:
    school_class = await SchoolClass.get(parse_object_id(class_id, "Class"))
    if not school_class:
        raise HTTPException(status_code=404, detail="Class not found")
    district_id = await district_of_school(school_class.school_id)
    if not class_in_scope(user, school_class, district_id):
        raise HTTPException(status_code=403, detail="You are not authorized for this class")
    return school_class


async def get_student_in_scope(user: User, student_id: str) -> Student:
    student = await Student.get(parse_object_id(student_id, "Student"))
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    await get_class_in_scope(user, student.class_id)
    return student


async def get_alert_in_scope(user: User, alert_id: str) -> Alert:
    alert = await Alert.get(parse_object_id(alert_id, "Alert"))
    if not alert:
        raise HTTPException(status_code=404, detail="Alert not found")
    if not alert_in_scope(user, alert):
        raise HTTPException(status_code=403, detail="You are not authorized for this alert")
    return alert


async def alerts_in_scope(user: User) -> list[Alert]:
    """Alerts visible to ``user``, newest first."""
    if user.role == UserRole.ADMIN:
        query = Alert.find_all()
    elif user.role == UserRole.HEAD:
        if not user.district_id:
            return []
        query = Alert.find(Alert.district_id == user.district_id)
    else:
        if not user.school_id:
            return []
        query = Alert.find(Alert.school_id == user.school_id)
    return await query.sort("-created_at").to_list()


async def alerts_for_students(student_ids: list[str]) -> list[Alert]:
    if not student_ids:
        return []
    return await Alert.find(In(Alert.student_id, student_ids)).sort("-created_at").to_list()


async def class_names(class_ids: list[str]) -> dict[str, str]:
    ids = [parse_object_id(cid, "Class") for cid in set(class_ids)]
    if not ids:
        return {}
    classes = await SchoolClass.find(In(SchoolClass.id, ids)).to_list()
    return {str(c.id): c.name for c in classes}


async def school_names(school_ids: list[str]) -> dict[str, str]:
    ids = [parse_object_id(sid, "School") for sid in set(school_ids)]
    if not ids:
        return {}
    schools = await School.find(In(School.id, ids)).to_list()
    return {str(s.id): s.name for s in schools}


async def attendance_for_students(student_ids: list[str]) -> list[AttendanceRecord]:
    """All attendance of the given students, oldest first."""
    if not student_ids:
        return []
    return await AttendanceRecord.find(In(AttendanceRecord.student_id, student_ids)).sort("date").to_list()


async def class_students(class_id: str) -> list[Student]:
    """Active students of a class, by name."""
    return await Student.find(Student.class_id == class_id, Student.is_active == True).sort("name").to_list()
