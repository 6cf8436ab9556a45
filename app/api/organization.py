"""Districts, schools and classes (admin)."""
from datetime import datetime

from fastapi import APIRouter, HTTPException

from app.api.deps import AdminOnly, parse_object_id
from app.models.district import District, DistrictCreate
from app.models.school import School, SchoolCreate
from app.models.school_class import SchoolClass, SchoolClassCreate, SchoolClassUpdate
from app.models.user import User, UserRole

router = APIRouter()


def _class_out(c: SchoolClass) -> dict:
    return {"id": str(c.id), "name": c.name, "school_id": c.school_id, "teacher_id": c.teacher_id}


async def _check_teacher(teacher_id: str, school_id: str) -> None:
    teacher = await User.get(parse_object_id(teacher_id, "Teacher"))
    if not teacher or teacher.role != UserRole.TEACHER:
        raise HTTPException(status_code=400, detail="teacher_id must reference a teacher")
    if teacher.school_id != school_id:
        raise HTTPException(status_code=400, detail="Teacher does not belong to this school")


@router.get("/districts")
async def list_districts(admin: AdminOnly):
    districts = await District.find_all().sort("name").to_list()
    return [{"id": str(d.id), "name": d.name} for d in districts]


@router.post("/districts", status_code=201)
async def create_district(data: DistrictCreate, admin: AdminOnly):
    d = District(name=data.name.strip())
    await d.insert()
    return {"id": str(d.id), "name": d.name}


@router.get("/schools")
async def list_schools(admin: AdminOnly, district_id: str | None = None):
    query = School.find(School.district_id == district_id) if district_id else School.find_all()
    schools = await query.sort("name").to_list()
    return [{"id": str(s.id), "name": s.name, "district_id": s.district_id} for s in schools]


@router.post("/schools", status_code=201)
async def create_school(data: SchoolCreate, admin: AdminOnly):
    district = await District.get(parse_object_id(data.district_id, "District"))
    if not district:
        raise HTTPException(status_code=404, detail="District not found")
    s = School(name=data.name.strip(), district_id=data.district_id)
    await s.insert()
    return {"id": str(s.id), "name": s.name, "district_id": s.district_id}


@router.get("/classes")
async def list_classes(admin: AdminOnly, school_id: str | None = None):
    query = SchoolClass.find(SchoolClass.school_id == school_id) if school_id else SchoolClass.find_all()
    return [_class_out(c) for c in await query.sort("name").to_list()]


@router.post("/classes", status_code=201)
async def create_class(data: SchoolClassCreate, admin: AdminOnly):
    school = await School.get(parse_object_id(data.school_id, "School"))
    if not school:
        raise HTTPException(status_code=404, detail="School not found")
    if data.teacher_id:
        await _check_teacher(data.teacher_id, data.school_id)
    c = SchoolClass(name=data.name.strip(), school_id=data.school_id, teacher_id=data.teacher_id)
    await c.insert()
    return _class_out(c)


@router.patch("/classes/{class_id}")
async def update_class(class_id: str, data: SchoolClassUpdate, admin: AdminOnly):
    """Rename a class or (re)assign its teacher."""
    c = await SchoolClass.get(parse_object_id(class_id, "Class"))
    if not c:
        raise HTTPException(status_code=404, detail="Class not found")
    update = data.model_dump(exclude_unset=True)
    if update.get("name"):
        c.name = update["name"].strip()
    if "teacher_id" in update:
        if update["teacher_id"]:
            await _check_teacher(update["teacher_id"], c.school_id)
        c.teacher_id = update["teacher_id"]
    c.updated_at = datetime.utcnow()
    await c.save()
    return _class_out(c)
