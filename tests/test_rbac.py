from __future__ import annotations

from types import SimpleNamespace

import pytest

from app.rbac import ACTION_BY_METHOD, DEFAULT_PAGE_BY_ROLE, DEFAULT_ROLE_PERMISSIONS, SYSTEM_MODULES
from app.services.roles import default_permissions, has_permission, permissions_inputs_from_map


def _role(key, is_active=True):
    return SimpleNamespace(key=key, is_active=is_active, permissions=default_permissions(key))


def test_every_default_role_covers_every_module():
    keys = {m["key"] for m in SYSTEM_MODULES}
    for role_key in DEFAULT_ROLE_PERMISSIONS:
        assert set(default_permissions(role_key)) == keys


@pytest.mark.parametrize(
    "role_key, module, action, allowed",
    [
        ("teacher", "attendance", "add", True),
        ("teacher", "attendance", "delete", False),
        ("teacher", "interventions", "add", True),
        ("teacher", "users", "view", False),
        ("head", "reports", "view", True),
        ("head", "attendance", "view", False),
        ("head", "interventions", "add", False),
        ("admin", "roles_permissions", "edit", True),
    ],
)
def test_default_permissions(role_key, module, action, allowed):
    assert has_permission(_role(role_key), module, action) is allowed


def test_inactive_or_missing_role_has_no_permissions():
    assert not has_permission(None, "dashboard", "view")
    assert not has_permission(_role("admin", is_active=False), "dashboard", "view")


def test_methods_map_to_actions():
    assert ACTION_BY_METHOD["GET"] == "view"
    assert ACTION_BY_METHOD["POST"] == "add"
    assert ACTION_BY_METHOD["PATCH"] == "edit"


def test_heads_land_on_reports():
    assert DEFAULT_PAGE_BY_ROLE["head"] == "reports"
    assert DEFAULT_PAGE_BY_ROLE["teacher"] == "dashboard"


def test_permissions_listed_in_module_order():
    items = permissions_inputs_from_map(default_permissions("head"))
    assert [i.module for i in items] == [m["key"] for m in SYSTEM_MODULES]
