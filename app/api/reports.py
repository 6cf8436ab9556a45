"""Reports: district/teacher outlook, class summaries, trends and exports."""
from datetime import date
from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Query

from app.api.alerts import describe_alerts
from app.api.deps import CurrentUser
from app.api.scope import (
    accessible_classes,
    accessible_schools,
    accessible_students,
    alerts_for_students,
    alerts_in_scope,
    attendance_for_students,
    class_students,
    district_for_user,
    get_class_in_scope,
)
from app.models.user import UserRole
from app.services.analytics import (
    attendance_rate,
    filter_by_date,
    group_rates,
    student_summary,
    weekly_trend,
)
from app.services.exports import ExportFormat, class_frame, export_response, summary_frame

router = APIRouter()


def _check_range(start: Optional[date], end: Optional[date]) -> None:
    if start and end and start > end:
        raise HTTPException(status_code=400, detail="start must not be after end")


@router.get("/overview")
async def get_overview(user: CurrentUser) -> dict[str, Any]:
    """District outlook for heads and admins, quick stats for teachers."""
    classes = await accessible_classes(user)
    students = await accessible_students(user)
    student_ids = [str(s.id) for s in students]
    records = await attendance_for_students(student_ids)

    if user.role == UserRole.TEACHER:
        alerts = await alerts_for_students(student_ids)
        groups = [
            (str(c.id), [str(s.id) for s in students if s.class_id == str(c.id)])
            for c in classes
        ]
        names = {str(c.id): c.name for c in classes}
        return {
            "total_classes": len(classes),
            "total_students": len(students),
            "avg_attendance": attendance_rate(records),
            "at_risk": len(alerts),
            "class_rates": [
                {"class_id": r["group"], "class_name": names[r["group"]], "percent": r["percent"]}
                for r in group_rates(groups, records)
            ],
        }

    schools = await accessible_schools(user)
    names = {str(s.id): s.name for s in schools}
    district = await district_for_user(user)
    alerts = await alerts_in_scope(user)
    groups = [
        (str(school.id), [str(s.id) for s in students if s.school_id == str(school.id)])
        for school in schools
    ]
    return {
        "district_name": district.name if district else None,
        "total_schools": len(schools),
        "total_students": len(students),
        "district_avg_attendance": attendance_rate(records),
        "students_at_risk": len(alerts),
        "school_rates": [
            {"school_id": r["group"], "school_name": names[r["group"]], "percent": r["percent"]}
            for r in group_rates(groups, records)
        ],
        "schools": [{"id": str(s.id), "name": s.name} for s in schools],
        "classes": [{"id": str(c.id), "name": c.name, "school_id": c.school_id} for c in classes],
    }


async def _summary_rows(class_id: str, start: Optional[date], end: Optional[date]):
    students = await class_students(class_id)
    records = filter_by_date(await attendance_for_students([str(s.id) for s in students]), start, end)
    return student_summary(students, records), records


@router.get("/summary")
async def get_summary(
    user: CurrentUser,
    class_id: str,
    start: Optional[date] = None,
    end: Optional[date] = None,
):
    """Per-student summary of one class plus its weekly trend."""
    _check_range(start, end)
    school_class = await get_class_in_scope(user, class_id)
    rows, records = await _summary_rows(class_id, start, end)
    for row in rows:
        row["class_name"] = school_class.name
    return {
        "class_id": class_id,
        "class_name": school_class.name,
        "start": start.isoformat() if start else None,
        "end": end.isoformat() if end else None,
        "students": rows,
        "trend": weekly_trend(records),
    }


@router.get("/summary/export")
async def export_summary(
    user: CurrentUser,
    class_id: str,
    start: Optional[date] = None,
    end: Optional[date] = None,
    export_format: ExportFormat = Query("csv", alias="format"),
):
    _check_range(start, end)
    school_class = await get_class_in_scope(user, class_id)
    rows, _ = await _summary_rows(class_id, start, end)
    df = summary_frame(rows, {class_id: school_class.name})
    return export_response(df, "attendance_summary", export_format)


@router.get("/classes/{class_id}/export")
async def export_class(
    class_id: str,
    user: CurrentUser,
    export_format: ExportFormat = Query("csv", alias="format"),
):
    """Whole-history attendance of one class."""
    school_class = await get_class_in_scope(user, class_id)
    students = await class_students(class_id)
    if not students:
        raise HTTPException(status_code=404, detail="No students found in this class")
    records = await attendance_for_students([str(s.id) for s in students])
    df = class_frame(student_summary(students, records))
    return export_response(df, f"{school_class.name}_attendance", export_format)


@router.get("/at-risk")
async def get_at_risk_details(user: CurrentUser):
    """Flagged students across the caller's district, or school for teachers."""
    return await describe_alerts(await alerts_in_scope(user))
