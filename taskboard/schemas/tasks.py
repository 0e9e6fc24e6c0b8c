from datetime import datetime
from pydantic import BaseModel

class TaskCreateIn(BaseModel):
    title: str | None = None
    description: str | None = None
    project_id: str | int | None = None
    start_date: datetime | None = None
    due_date: datetime | None = None
    assignee_ids: list[str | int] = []
    priority: str | None = None
    labels: str | None = None
    status: str | None = None

class TaskDetailsUpdateIn(BaseModel):
    title: str | None = None
    description: str | None = None
    start_date: datetime | None = None
    due_date: datetime | None = None
    status: str | None = None
    priority: str | None = None
    labels: str | None = None

class TaskStatusUpdateIn(BaseModel):
    status: str | None = None

class AddAssigneesIn(BaseModel):
    user_ids: list[str | int] | None = None

class UserRefOut(BaseModel):
    id: str
    name: str
    email: str
    role: str
    avatar: str | None

class AssigneeOut(UserRefOut):
    user_id: str

class TaskOut(BaseModel):
    task_id: str
    id: str
    title: str
    name: str
    description: str
    status: str
    assignees: list[AssigneeOut]
    assigned_users: list[UserRefOut]
    project_id: str
    created_at: datetime
    updated_at: datetime
    start_date: datetime | None
    due_date: datetime | None
    priority: str
    labels: str
    completed: bool

class TaskCreatedOut(BaseModel):
    message: str = "task created successfully"
    task_id: str
    task: TaskOut

class TaskUpdatedOut(BaseModel):
    message: str = "task updated successfully"
    task_id: str
    task: TaskOut

class TaskStatusOut(BaseModel):
    message: str = "task status updated successfully"
    task_id: str
    status: str

class TaskAssigneesOut(BaseModel):
    task_id: str
    id: str
    assignees: list[AssigneeOut]
    updated_at: datetime

class AssigneesAddedOut(BaseModel):
    success: bool = True
    message: str = "assignees added successfully"
    task: TaskAssigneesOut
