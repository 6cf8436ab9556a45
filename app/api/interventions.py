"""Interventions logged against at-risk alerts."""
import logging
from typing import Optional

from beanie.operators import In
from fastapi import APIRouter

from app.api.deps import CurrentUser
from app.api.scope import alerts_in_scope, get_alert_in_scope
from app.models.intervention import Intervention, InterventionCreate

logger = logging.getLogger(__name__)

router = APIRouter()


def intervention_out(i: Intervention) -> dict:
    return {
        "id": str(i.id),
        "student_id": i.student_id,
        "alert_id": i.alert_id,
        "teacher_id": i.teacher_id,
        "intervention_type": i.intervention_type,
        "description": i.description,
        "outcome": i.outcome,
        "created_at": i.created_at.isoformat(),
    }


@router.post("/", status_code=201)
async def create_intervention(data: InterventionCreate, user: CurrentUser):
    alert = await get_alert_in_scope(user, data.alert_id)
    intervention = Intervention(
        student_id=alert.student_id,
        alert_id=str(alert.id),
        teacher_id=str(user.id),
        intervention_type=data.intervention_type,
        description=data.description,
        outcome=data.outcome,
    )
    await intervention.insert()
    logger.info("Intervention %s recorded for student %s by %s", intervention.id, alert.student_id, user.id)
    return intervention_out(intervention)


@router.get("/")
async def list_interventions(
    user: CurrentUser,
    student_id: Optional[str] = None,
    alert_id: Optional[str] = None,
):
    alert_ids = [str(a.id) for a in await alerts_in_scope(user)]
    if alert_id:
        alert_ids = [aid for aid in alert_ids if aid == alert_id]
    if not alert_ids:
        return []
    query = Intervention.find(In(Intervention.alert_id, alert_ids))
    if student_id:
        query = query.find(Intervention.student_id == student_id)
    interventions = await query.sort("-created_at").to_list()
    return [intervention_out(i) for i in interventions]
