from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from taskboard.rbac.perms import can_access_performance, get_user_permissions
from taskboard.rbac.roles import normalize_role

class AuthenticatedUser(BaseModel):
    """The signed-in identity carried by the session token.

    Built once at login from the authentication backend's response and
    immutable afterwards; ``with_name`` is the only supported change.
    ``role`` is always stored normalized, ``permissions`` and
    ``can_access_performance`` are derived from it.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    name: str
    role: str
    department: str | None = None
    organization_id: str | None = None
    organization_name: str | None = None
    permissions: tuple[str, ...] = ()
    can_access_performance: bool = False
    access_token: str | None = None

    @classmethod
    def build(
        cls,
        *,
        id: str,
        email: str,
        name: str,
        role: str,
        department: str | None = None,
        organization_id: str | None = None,
        organization_name: str | None = None,
        access_token: str | None = None,
    ) -> AuthenticatedUser:
        role = normalize_role(role)
        return cls(
            id=str(id),
            email=email,
            name=name,
            role=role,
            department=department,
            organization_id=organization_id,
            organization_name=organization_name,
            permissions=tuple(get_user_permissions(role)),
            can_access_performance=can_access_performance(role),
            access_token=access_token,
        )

    @classmethod
    def from_backend(cls, data: Mapping[str, Any]) -> AuthenticatedUser:
        user_id = str(data["user_id"])
        return cls.build(
            id=user_id,
            email=data["email"],
            name=data.get("username") or data["email"],
            role=data.get("role_name") or "",
            department=data.get("department_name"),
            # backend login payload carries no organization id
            organization_id=str(data.get("organization_id") or user_id),
            organization_name=data.get("organization_name"),
            access_token=data.get("access_token"),
        )

    def to_claims(self) -> dict[str, Any]:
        return {
            "sub": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role,
            "department": self.department,
            "organizationId": self.organization_id,
            "organizationName": self.organization_name,
            "permissions": list(self.permissions),
            "canAccessPerformance": self.can_access_performance,
            "accessToken": self.access_token,
        }

    @classmethod
    def from_claims(cls, claims: Mapping[str, Any]) -> AuthenticatedUser:
        return cls(
            id=str(claims["sub"]),
            email=claims.get("email") or "",
            name=claims.get("name") or "",
            role=normalize_role(claims.get("role")),
            department=claims.get("department"),
            organization_id=claims.get("organizationId"),
            organization_name=claims.get("organizationName"),
            permissions=tuple(claims.get("permissions") or ()),
            can_access_performance=bool(claims.get("canAccessPerformance")),
            access_token=claims.get("accessToken"),
        )

    def with_name(self, name: str) -> AuthenticatedUser:
        return self.model_copy(update={"name": name})
