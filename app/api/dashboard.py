from typing import Any, Dict, Optional

from fastapi import APIRouter

from app.api.alerts import describe_alerts
from app.api.deps import CurrentUser
from app.api.scope import (
    accessible_classes,
    accessible_students,
    alerts_for_students,
    alerts_in_scope,
    attendance_for_students,
    district_for_user,
)
from app.models.user import UserRole
from app.services.analytics import attendance_rate, student_summary

router = APIRouter()

AT_RISK_LIST_SIZE = 10
RECENT_ALERTS_SIZE = 5


@router.get("/")
async def get_dashboard(user: CurrentUser, class_id: Optional[str] = None) -> Dict[str, Any]:
    """Overview for the signed-in user.

    Teachers get their classes, students and per-student summary; heads and
    admins get the same metrics across their district (or everything).
    """
    classes = await accessible_classes(user)
    students = await accessible_students(user)
    student_ids = [str(s.id) for s in students]
    records = await attendance_for_students(student_ids)

    if user.role == UserRole.TEACHER:
        alerts = await alerts_for_students(student_ids)
    else:
        alerts = await alerts_in_scope(user)
    described = await describe_alerts(alerts)

    district = await district_for_user(user)
    metrics = {
        "total_students": len(students),
        "avg_attendance_rate": attendance_rate(records, digits=1) if students else 0,
        "at_risk_count": len(alerts),
    }

    response: Dict[str, Any] = {
        "role": user.role.value,
        "district_name": district.name if district else None,
        "metrics": metrics,
        "at_risk": [
            # Every flagged student is treated as high risk on the dashboard
            {**a, "risk_level": "high"}
            for a in described[:AT_RISK_LIST_SIZE]
        ],
        "recent_alerts": described[:RECENT_ALERTS_SIZE],
    }

    if user.role == UserRole.TEACHER:
        class_map = {str(c.id): c.name for c in classes}
        shown = [s for s in students if not class_id or s.class_id == class_id]
        summary = student_summary(shown, records)
        for row in summary:
            row["class_name"] = class_map.get(row["class_id"], "N/A")
        response["classes"] = [{"id": cid, "name": name} for cid, name in class_map.items()]
        response["attendance_summary"] = summary
    else:
        response["alerts"] = described
    return response
