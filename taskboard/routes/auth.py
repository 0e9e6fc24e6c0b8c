from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from taskboard.auth.backend import authenticate
from taskboard.auth.deps import get_current_user
from taskboard.auth.session import AuthenticatedUser
from taskboard.auth.tokens import issue_session_token
from taskboard.config import settings
from taskboard.rbac.perms import (
    can_access_performance,
    can_manage_all_departments,
    can_manage_own_department,
    get_invitable_roles,
)
from taskboard.rbac.roles import display_role
from taskboard.rbac.task_board import get_task_board_permissions
from taskboard.ratelimit import rate_limit
from taskboard.schemas.auth import (
    LoginIn,
    LoginOut,
    PermissionsOut,
    SessionOut,
    SessionUpdateIn,
    SessionUserOut,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

def _user_out(user: AuthenticatedUser) -> SessionUserOut:
    return SessionUserOut(
        id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        department=user.department,
        organization_id=user.organization_id,
        organization_name=user.organization_name,
        permissions=list(user.permissions),
        can_access_performance=user.can_access_performance,
    )

def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.jwt_expires_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )

@router.post("/login", response_model=LoginOut)
def login(
    payload: LoginIn,
    response: Response,
    _: None = Depends(rate_limit("auth:login", limit_per_window=settings.rate_limit_login_per_min)),
) -> LoginOut:
    email = (payload.email or "").strip().lower()
    user = authenticate(email, payload.password)
    if user is None:
        # same answer whichever credential was wrong
        raise HTTPException(status_code=401, detail="invalid credentials")

    token = issue_session_token(user)
    _set_session_cookie(response, token)
    logger.info("login ok", extra={"user_id": user.id, "role": user.role})
    return LoginOut(access_token=token, user=_user_out(user))

@router.get("/session", response_model=SessionOut)
def get_session(user: AuthenticatedUser = Depends(get_current_user)) -> SessionOut:
    return SessionOut(user=_user_out(user), backend_access_token=user.access_token)

@router.post("/session/update", response_model=LoginOut)
def update_session(
    payload: SessionUpdateIn,
    response: Response,
    user: AuthenticatedUser = Depends(get_current_user),
) -> LoginOut:
    name = payload.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="name is required")

    updated = user.with_name(name)
    token = issue_session_token(updated)
    _set_session_cookie(response, token)
    return LoginOut(access_token=token, user=_user_out(updated))

@router.post("/logout")
def logout(response: Response) -> dict:
    response.delete_cookie(settings.session_cookie_name)
    return {"logged_out": True}

@router.get("/permissions", response_model=PermissionsOut)
def get_permissions(user: AuthenticatedUser = Depends(get_current_user)) -> PermissionsOut:
    return PermissionsOut(
        role=user.role,
        display_role=display_role(user.role),
        permissions=list(user.permissions),
        can_access_performance=can_access_performance(user.role),
        can_manage_all_departments=can_manage_all_departments(user.role),
        can_manage_own_department=can_manage_own_department(user.role),
        invitable_roles=get_invitable_roles(user.role),
        task_board=get_task_board_permissions(user.role),
    )
