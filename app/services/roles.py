"""Role lifecycle helpers and permission checks."""
from __future__ import annotations

from datetime import datetime

from app.config import settings
from app.models.role import PermissionSet, Role, RolePermissionInput, RoleResponse
from app.rbac import DEFAULT_ROLE_PERMISSIONS, SYSTEM_MODULES


def permissions_map_from_inputs(items: list[RolePermissionInput]) -> dict[str, PermissionSet]:
    return {
        item.module: PermissionSet(view=item.view, add=item.add, edit=item.edit, delete=item.delete)
        for item in items
    }


def permissions_inputs_from_map(permissions: dict[str, PermissionSet]) -> list[RolePermissionInput]:
    outputs: list[RolePermissionInput] = []
    for module in (m["key"] for m in SYSTEM_MODULES):
        perm = permissions.get(module, PermissionSet())
        outputs.append(
            RolePermissionInput(module=module, view=perm.view, add=perm.add, edit=perm.edit, delete=perm.delete)
        )
    return outputs


def default_permissions(role_key: str) -> dict[str, PermissionSet]:
    defaults = DEFAULT_ROLE_PERMISSIONS.get(role_key, {})
    return {
        m["key"]: PermissionSet(**defaults.get(m["key"], {}))
        for m in SYSTEM_MODULES
    }


def can_edit_role(role: Role) -> bool:
    if not role.is_default:
        return True
    return settings.allow_edit_default_roles


def role_to_response(role: Role) -> RoleResponse:
    return RoleResponse(
        id=str(role.id),
        key=role.key,
        name=role.name,
        description=role.description,
        is_active=role.is_active,
        is_default=role.is_default,
        editable=can_edit_role(role),
        permissions=permissions_inputs_from_map(role.permissions),
    )


def has_permission(role: Role | None, module: str, action: str) -> bool:
    if not role or not role.is_active:
        return False
    permission = role.permissions.get(module)
    if not permission:
        return False
    return bool(getattr(permission, action, False))


async def ensure_default_roles() -> None:
    """Ensure built-in roles exist and include current module keys."""
    for role_key in DEFAULT_ROLE_PERMISSIONS:
        role = await Role.find_one(Role.key == role_key)
        defaults = default_permissions(role_key)
        title = role_key.replace("_", " ").title()

        if role:
            # Keep customized permissions; only backfill modules added since.
            role.permissions = {
                module: role.permissions.get(module, perm) for module, perm in defaults.items()
            }
            role.is_default = True
            role.name = role.name or title
            role.updated_at = datetime.utcnow()
            await role.save()
            continue

        await Role(
            key=role_key,
            name=title,
            description=f"Default {title} role",
            is_active=True,
            is_default=True,
            permissions=defaults,
        ).insert()
