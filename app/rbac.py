"""RBAC module/action registry and defaults."""
from __future__ import annotations

from typing import Literal

PermissionAction = Literal["view", "add", "edit", "delete"]

ACTION_BY_METHOD: dict[str, PermissionAction] = {
    "GET": "view",
    "HEAD": "view",
    "OPTIONS": "view",
    "POST": "add",
    "PUT": "edit",
    "PATCH": "edit",
    "DELETE": "delete",
}

SYSTEM_MODULES: list[dict[str, str]] = [
    {"key": "dashboard", "name": "Dashboard"},
    {"key": "attendance", "name": "Attendance"},
    {"key": "reports", "name": "Reports"},
    {"key": "students", "name": "Students"},
    {"key": "alerts", "name": "At-Risk Alerts"},
    {"key": "interventions", "name": "Interventions"},
    {"key": "organization", "name": "Districts, Schools & Classes"},
    {"key": "users", "name": "Users"},
    {"key": "roles_permissions", "name": "Roles & Permissions"},
]


def _full_permissions() -> dict[str, bool]:
    return {"view": True, "add": True, "edit": True, "delete": True}


def _view_only() -> dict[str, bool]:
    return {"view": True, "add": False, "edit": False, "delete": False}


def _no_access() -> dict[str, bool]:
    return {"view": False, "add": False, "edit": False, "delete": False}


def _module_defaults(fill: dict[str, bool]) -> dict[str, dict[str, bool]]:
    return {module["key"]: dict(fill) for module in SYSTEM_MODULES}


DEFAULT_ROLE_PERMISSIONS: dict[str, dict[str, dict[str, bool]]] = {
    "admin": _module_defaults(_full_permissions()),
    "head": {
        **_module_defaults(_no_access()),
        "dashboard": _view_only(),
        "reports": _view_only(),
        "students": _view_only(),
        "alerts": _view_only(),
        "interventions": _view_only(),
    },
    "teacher": {
        **_module_defaults(_no_access()),
        "dashboard": _view_only(),
        "attendance": {"view": True, "add": True, "edit": True, "delete": False},
        "reports": _view_only(),
        "students": _view_only(),
        "alerts": _view_only(),
        "interventions": {"view": True, "add": True, "edit": False, "delete": False},
    },
}

# Landing page per role; heads start on the district outlook.
DEFAULT_PAGE_BY_ROLE: dict[str, str] = {
    "admin": "dashboard",
    "head": "reports",
    "teacher": "dashboard",
}
