from datetime import datetime
from pydantic import BaseModel

class ProjectCreateIn(BaseModel):
    # legacy clients send "name", current ones "title"
    title: str | None = None
    name: str | None = None
    description: str | None = None
    client_company: str | None = None
    urgency: str | None = None
    start_date: datetime | None = None
    due_date: datetime | None = None
    collaborator_ids: list[str | int] = []

class ProjectOut(BaseModel):
    project_id: str
    id: str
    title: str
    name: str
    description: str
    client_company: str | None
    client_id: str | None
    status: str
    urgency: str
    budget: float | None
    total_revenue: float | None
    start_date: datetime | None
    due_date: datetime | None
    created_at: datetime
    updated_at: datetime

class CollaboratorOut(BaseModel):
    user_id: str
    id: str
    name: str
    username: str
    full_name: str
    email: str
    avatar: str | None
    profile_picture: str | None
    role: str
