"""At-risk alerts and the absences behind them."""
from beanie.operators import In
from fastapi import APIRouter

from app.api.deps import CurrentUser, parse_object_id
from app.api.scope import alerts_in_scope, class_names, get_alert_in_scope, school_names
from app.models.alert import Alert
from app.models.attendance import AttendanceRecord
from app.models.student import Student

router = APIRouter()


async def describe_alerts(alerts: list[Alert]) -> list[dict]:
    """Alerts joined with student, class and school names."""
    student_ids = [parse_object_id(a.student_id, "Student") for a in alerts]
    students = await Student.find(In(Student.id, student_ids)).to_list() if student_ids else []
    by_id = {str(s.id): s for s in students}
    classes = await class_names([s.class_id for s in students])
    schools = await school_names([a.school_id for a in alerts])

    described = []
    for a in alerts:
        student = by_id.get(a.student_id)
        described.append(
            {
                "id": str(a.id),
                "student_id": a.student_id,
                "student_name": student.name if student else "Unknown",
                "class_id": student.class_id if student else None,
                "class_name": classes.get(student.class_id) if student else None,
                "school_id": a.school_id,
                "school_name": schools.get(a.school_id),
                "district_id": a.district_id,
                "reason": a.reason,
                "created_at": a.created_at.isoformat(),
            }
        )
    return described


@router.get("/")
async def list_alerts(user: CurrentUser):
    return await describe_alerts(await alerts_in_scope(user))


@router.get("/{alert_id}")
async def get_alert(alert_id: str, user: CurrentUser):
    alert = await get_alert_in_scope(user, alert_id)
    return (await describe_alerts([alert]))[0]


@router.get("/{alert_id}/missed-days")
async def get_missed_days(alert_id: str, user: CurrentUser):
    """Dates on which the flagged student was recorded absent."""
    alert = await get_alert_in_scope(user, alert_id)
    absences = (
        await AttendanceRecord.find(
            AttendanceRecord.student_id == alert.student_id,
            AttendanceRecord.present == False,
        )
        .sort("date")
        .to_list()
    )
    return {"student_id": alert.student_id, "dates": [r.date.isoformat() for r in absences]}
