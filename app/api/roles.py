"""Roles and module permissions API."""
from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, HTTPException

from app.api.deps import AdminOnly, parse_object_id
from app.models.role import Role, RoleUpdateRequest
from app.rbac import SYSTEM_MODULES
from app.services.roles import can_edit_role, permissions_map_from_inputs, role_to_response

router = APIRouter()


@router.get("/modules")
async def list_modules(user: AdminOnly):
    return {"items": SYSTEM_MODULES}


@router.get("/")
async def list_roles(user: AdminOnly):
    roles = await Role.find_all().sort("name").to_list()
    return {"items": [role_to_response(role).model_dump() for role in roles]}


@router.get("/{role_id}")
async def get_role(role_id: str, user: AdminOnly):
    role = await Role.get(parse_object_id(role_id, "Role"))
    if not role:
        raise HTTPException(status_code=404, detail="Role not found")
    return role_to_response(role)


@router.patch("/{role_id}")
async def update_role(role_id: str, data: RoleUpdateRequest, user: AdminOnly):
    role = await Role.get(parse_object_id(role_id, "Role"))
    if not role:
        raise HTTPException(status_code=404, detail="Role not found")
    if not can_edit_role(role):
        raise HTTPException(status_code=403, detail="Editing default roles is disabled by system settings")

    update_data = data.model_dump(exclude_unset=True)
    if "name" in update_data:
        role.name = (update_data["name"] or "").strip() or role.name
    if "description" in update_data:
        role.description = (update_data["description"] or "").strip() or None
    if "is_active" in update_data:
        role.is_active = bool(update_data["is_active"])
    if "permissions" in update_data:
        role.permissions = permissions_map_from_inputs(data.permissions or [])
    role.updated_at = datetime.utcnow()
    await role.save()
    return role_to_response(role)
