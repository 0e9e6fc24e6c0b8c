import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from taskboard.auth.deps import get_current_user
from taskboard.auth.session import AuthenticatedUser
from taskboard.db import get_db, next_id
from taskboard.errors import store_errors
from taskboard.models.base import now_utc
from taskboard.models.enums import TaskStatus
from taskboard.models.project import Project
from taskboard.models.task import Task, task_assignees
from taskboard.models.user import User
from taskboard.rbac.roles import normalize_role
from taskboard.rbac.task_board import (
    can_access_user_search,
    get_task_fetching_strategy,
    get_user_search_scope,
)
from taskboard.schemas.tasks import (
    AddAssigneesIn,
    AssigneeOut,
    AssigneesAddedOut,
    TaskAssigneesOut,
    TaskCreatedOut,
    TaskCreateIn,
    TaskDetailsUpdateIn,
    TaskOut,
    TaskStatusOut,
    TaskStatusUpdateIn,
    TaskUpdatedOut,
    UserRefOut,
)
from taskboard.schemas.users import SearchedUserOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["tasks"])

INVALID_STATUS = "invalid status. must be one of: todo, in_progress, done"

def parse_status(value: str | None) -> TaskStatus:
    try:
        return TaskStatus(value)
    except ValueError:
        raise HTTPException(status_code=422, detail=INVALID_STATUS)

def user_ref(u: User) -> UserRefOut:
    return UserRefOut(id=u.id, name=u.name, email=u.email, role=u.role, avatar=u.avatar)

def assignee_out(u: User) -> AssigneeOut:
    return AssigneeOut(user_id=u.id, id=u.id, name=u.name, email=u.email, role=u.role, avatar=u.avatar)

def task_out(t: Task) -> TaskOut:
    return TaskOut(
        task_id=t.id,
        id=t.id,
        title=t.title,
        name=t.title,
        description=t.description or "",
        status=t.status.value,
        assignees=[assignee_out(u) for u in t.assignees],
        assigned_users=[user_ref(u) for u in t.assignees],
        project_id=t.project_id,
        created_at=t.created_at,
        updated_at=t.updated_at,
        start_date=t.start_date,
        due_date=t.due_date,
        priority=t.priority,
        labels=t.labels,
        completed=t.status == TaskStatus.done,
    )

def get_task_or_404(db: Session, task_id: str) -> Task:
    t = db.get(Task, task_id)
    if t is None:
        raise HTTPException(status_code=404, detail="task not found")
    return t

def load_users(db: Session, ids: list) -> list[User]:
    wanted = [str(i) for i in ids]
    if not wanted:
        return []
    # unknown ids are ignored
    return list(db.scalars(select(User).where(User.id.in_(wanted)).order_by(User.id)).all())

@router.get("/get_tasks_by_project/{project_id}", response_model=list[TaskOut])
def get_tasks_by_project(
    project_id: str,
    db: Session = Depends(get_db),
) -> list[TaskOut]:
    with store_errors(db, "failed to fetch tasks"):
        if db.get(Project, project_id) is None:
            raise HTTPException(status_code=404, detail="project not found")

        q = select(Task).where(Task.project_id == project_id).order_by(Task.created_at, Task.id)
        rows = db.scalars(q).all()
        return [task_out(t) for t in rows]

@router.get("/get_assigned_tasks", response_model=list[TaskOut])
def get_assigned_tasks(
    user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[TaskOut]:
    with store_errors(db, "failed to fetch assigned tasks"):
        q = select(Task).order_by(Task.created_at, Task.id)
        if get_task_fetching_strategy(user.role) == "assigned":
            q = q.join(task_assignees, task_assignees.c.task_id == Task.id).where(
                task_assignees.c.user_id == user.id
            )
        rows = db.scalars(q).all()
        return [task_out(t) for t in rows]

@router.post("/create_task", response_model=TaskCreatedOut)
def create_task(
    payload: TaskCreateIn,
    user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> TaskCreatedOut:
    title = (payload.title or "").strip()
    project_id = str(payload.project_id).strip() if payload.project_id is not None else ""
    if not title or not project_id:
        raise HTTPException(status_code=400, detail="title and project_id are required")

    status = parse_status(payload.status or TaskStatus.todo.value)

    with store_errors(db, "failed to create task"):
        if db.get(Project, project_id) is None:
            raise HTTPException(status_code=404, detail="project not found")

        t = Task(
            id=next_id(db, Task.id),
            project_id=project_id,
            title=title,
            description=payload.description or "",
            status=status,
            priority=payload.priority or "medium",
            labels=payload.labels or "",
            start_date=payload.start_date,
            due_date=payload.due_date,
            assignees=load_users(db, payload.assignee_ids),
        )
        db.add(t)
        db.commit()
        db.refresh(t)
        logger.info("task created", extra={"user_id": user.id})
        return TaskCreatedOut(task_id=t.id, task=task_out(t))

@router.patch("/update_task_details/{task_id}", response_model=TaskUpdatedOut)
def update_task_details(
    task_id: str,
    payload: TaskDetailsUpdateIn,
    db: Session = Depends(get_db),
) -> TaskUpdatedOut:
    fields = payload.model_fields_set
    # validate before touching the store
    status = parse_status(payload.status) if "status" in fields else None
    if "title" in fields and not (payload.title or "").strip():
        raise HTTPException(status_code=400, detail="title must not be empty")

    with store_errors(db, "failed to update task details"):
        t = get_task_or_404(db, task_id)

        if "title" in fields:
            t.title = payload.title.strip()
        if "description" in fields:
            t.description = payload.description or ""
        # explicit null clears a date
        if "start_date" in fields:
            t.start_date = payload.start_date
        if "due_date" in fields:
            t.due_date = payload.due_date
        if status is not None:
            t.status = status
        if "priority" in fields and payload.priority is not None:
            t.priority = payload.priority
        if "labels" in fields:
            t.labels = payload.labels or ""
        t.updated_at = now_utc()

        db.commit()
        db.refresh(t)
        return TaskUpdatedOut(task_id=t.id, task=task_out(t))

@router.patch("/update_task_status/{task_id}", response_model=TaskStatusOut)
def update_task_status(
    task_id: str,
    payload: TaskStatusUpdateIn,
    db: Session = Depends(get_db),
) -> TaskStatusOut:
    status = parse_status(payload.status)

    with store_errors(db, "failed to update task status"):
        t = get_task_or_404(db, task_id)
        t.status = status
        t.updated_at = now_utc()
        db.commit()
        return TaskStatusOut(task_id=t.id, status=t.status.value)

@router.post("/add_assignees_to_task/{task_id}", response_model=AssigneesAddedOut)
def add_assignees_to_task(
    task_id: str,
    payload: AddAssigneesIn,
    db: Session = Depends(get_db),
) -> AssigneesAddedOut:
    if not payload.user_ids:
        raise HTTPException(status_code=400, detail="user_ids array is required and must not be empty")

    with store_errors(db, "failed to add assignees to task"):
        t = get_task_or_404(db, task_id)

        existing = {u.id for u in t.assignees}
        for u in load_users(db, payload.user_ids):
            if u.id not in existing:
                t.assignees.append(u)
                existing.add(u.id)
        t.updated_at = now_utc()

        db.commit()
        db.refresh(t)
        return AssigneesAddedOut(
            task=TaskAssigneesOut(
                task_id=t.id,
                id=t.id,
                assignees=[assignee_out(u) for u in t.assignees],
                updated_at=t.updated_at,
            )
        )

@router.get("/search_users_to_assign_tasks", response_model=list[SearchedUserOut])
def search_users_to_assign_tasks(
    task_id: str | None = None,
    username: str | None = None,
    email: str | None = None,
    department_id: str | None = None,
    user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[SearchedUserOut]:
    if not can_access_user_search(user.role):
        raise HTTPException(status_code=403, detail="forbidden")
    scope = get_user_search_scope(user.role)

    with store_errors(db, "failed to search users"):
        excluded: set[str] = set()
        if task_id:
            excluded = {u.id for u in get_task_or_404(db, task_id).assignees}

        results: list[SearchedUserOut] = []
        for u in db.scalars(select(User).order_by(User.id)).all():
            if u.id in excluded or normalize_role(u.role) not in scope.allowed_roles:
                continue
            if scope.department_restriction and u.department != user.department:
                continue
            if department_id and u.department != department_id:
                continue
            if username and username.lower() not in u.name.lower():
                continue
            if email and email.lower() not in u.email.lower():
                continue
            results.append(
                SearchedUserOut(
                    user_id=u.id,
                    organization_id=user.organization_id or "",
                    username=u.name,
                    email=u.email,
                    role_str=u.role,
                    department_name=u.department or "",
                )
            )
        return results
