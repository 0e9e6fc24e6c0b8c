import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from taskboard.auth.deps import get_current_user
from taskboard.auth.session import AuthenticatedUser
from taskboard.db import get_db, next_id
from taskboard.errors import store_errors
from taskboard.models.project import Project, project_collaborators
from taskboard.models.user import User
from taskboard.rbac.task_board import can_view_all_projects
from taskboard.schemas.projects import CollaboratorOut, ProjectCreateIn, ProjectOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["projects"])

def project_out(p: Project) -> ProjectOut:
    return ProjectOut(
        project_id=p.id,
        id=p.id,
        title=p.name,
        name=p.name,
        description=p.description or "",
        client_company=p.client_company,
        client_id=p.client_id,
        status=p.status,
        urgency=p.urgency,
        budget=p.budget,
        total_revenue=p.total_revenue,
        start_date=p.start_date,
        due_date=p.due_date,
        created_at=p.created_at,
        updated_at=p.updated_at,
    )

def collaborator_out(u: User) -> CollaboratorOut:
    return CollaboratorOut(
        user_id=u.id,
        id=u.id,
        name=u.name,
        username=u.name.lower().replace(" ", ".", 1),
        full_name=u.name,
        email=u.email,
        avatar=u.avatar,
        profile_picture=u.avatar,
        role=u.role,
    )

@router.get("/get_projects", response_model=list[ProjectOut])
def get_projects(
    user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[ProjectOut]:
    with store_errors(db, "failed to fetch projects"):
        q = select(Project).order_by(Project.id)
        if not can_view_all_projects(user.role):
            q = q.join(project_collaborators, project_collaborators.c.project_id == Project.id).where(
                project_collaborators.c.user_id == user.id
            )
        rows = db.scalars(q).all()
        return [project_out(p) for p in rows]

@router.post("/create_project", response_model=ProjectOut)
def create_project(
    payload: ProjectCreateIn,
    user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ProjectOut:
    name = (payload.title or payload.name or "").strip()
    if not name:
        raise HTTPException(status_code=400, detail="title is required")
    if not can_view_all_projects(user.role):
        raise HTTPException(status_code=403, detail="forbidden")

    with store_errors(db, "failed to create project"):
        ids = [str(i) for i in payload.collaborator_ids]
        collaborators = db.scalars(select(User).where(User.id.in_(ids))).all() if ids else []

        p = Project(
            id=next_id(db, Project.id),
            name=name,
            description=payload.description or "",
            client_company=payload.client_company,
            urgency=payload.urgency or "medium",
            start_date=payload.start_date,
            due_date=payload.due_date,
            collaborators=list(collaborators),
        )
        db.add(p)
        db.commit()
        db.refresh(p)
        logger.info("project created", extra={"user_id": user.id})
        return project_out(p)

@router.get("/get_project_collaborators/{project_id}", response_model=list[CollaboratorOut])
def get_project_collaborators(
    project_id: str,
    db: Session = Depends(get_db),
) -> list[CollaboratorOut]:
    with store_errors(db, "failed to fetch project collaborators"):
        p = db.get(Project, project_id)
        if p is None:
            raise HTTPException(status_code=404, detail="project not found")
        return [collaborator_out(u) for u in p.collaborators]
