import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from taskboard.auth.deps import get_current_user
from taskboard.auth.session import AuthenticatedUser
from taskboard.db import get_db, next_id
from taskboard.errors import store_errors
from taskboard.models.user import User
from taskboard.rbac.perms import can_invite_role, can_manage_all_departments
from taskboard.rbac.roles import display_role
from taskboard.schemas.users import InvitedUserOut, InviteIn

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])

@router.post("/invite", response_model=InvitedUserOut)
def invite_user(
    payload: InviteIn,
    inviter: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> InvitedUserOut:
    if not can_invite_role(inviter.role, payload.role_name):
        raise HTTPException(status_code=403, detail="forbidden")

    # everyone but the ceo invites into their own department
    department = payload.department_name if can_manage_all_departments(inviter.role) else inviter.department
    department = (department or "").strip() or None
    if department is None:
        raise HTTPException(status_code=400, detail="department_name is required")

    email = payload.email.lower().strip()
    with store_errors(db, "failed to invite user"):
        if db.scalar(select(User).where(User.email == email)) is not None:
            raise HTTPException(status_code=409, detail="user already exists")

        u = User(
            id=next_id(db, User.id),
            name=(payload.name or "").strip() or email.split("@")[0],
            email=email,
            role=display_role(payload.role_name),
            department=department,
        )
        db.add(u)
        db.commit()
        db.refresh(u)
        logger.info("user invited", extra={"user_id": inviter.id, "role": inviter.role})
        return InvitedUserOut(
            user_id=u.id,
            id=u.id,
            name=u.name,
            email=u.email,
            role=u.role,
            department=u.department,
        )
