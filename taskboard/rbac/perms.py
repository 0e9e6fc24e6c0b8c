"""Role-based capability checks.

Every function here is pure and total: unknown or malformed roles simply
have no capabilities. They are used for enforcement in the handlers and the
route guard, and exposed to clients for conditional rendering.
"""
from collections.abc import Iterable, Mapping
from typing import Any

from taskboard.models.enums import Role
from taskboard.rbac.roles import (
    INVITE_TABLE,
    MANAGEMENT_ROLES,
    PERFORMANCE_ROLES,
    ROLE_PERMISSIONS,
    normalize_role,
    parse_role,
)

def can_invite_role(user_role: str | Role | None, target_role: str | Role | None) -> bool:
    role = parse_role(user_role)
    if role is None:
        return False
    target = normalize_role(target_role)
    return any(r.value == target for r in INVITE_TABLE[role])

def can_access_performance(user_role: str | Role | None) -> bool:
    return parse_role(user_role) in PERFORMANCE_ROLES

def can_manage_all_departments(user_role: str | Role | None) -> bool:
    return parse_role(user_role) == Role.ceo

def can_manage_own_department(user_role: str | Role | None) -> bool:
    return parse_role(user_role) in MANAGEMENT_ROLES

def get_invitable_roles(user_role: str | Role | None) -> list[str]:
    role = parse_role(user_role)
    if role is None:
        return []
    return [r.value for r in INVITE_TABLE[role]]

def get_user_permissions(user_role: str | Role | None) -> list[str]:
    role = parse_role(user_role)
    if role is None:
        return []
    return [p.value for p in ROLE_PERMISSIONS[role]]

def has_permission(user: Any, permission: str) -> bool:
    # plain membership on the granted list, no hierarchy walk
    if user is None:
        return False
    if isinstance(user, Mapping):
        granted = user.get("permissions")
    else:
        granted = getattr(user, "permissions", None)
    if not granted or isinstance(granted, str) or not isinstance(granted, Iterable):
        return False
    wanted = getattr(permission, "value", permission)
    return any(getattr(p, "value", p) == wanted for p in granted)
