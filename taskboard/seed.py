"""Demo data for the in-memory store.

Idempotent: rows that already exist (by id) are left untouched.
"""
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from taskboard.models.enums import TaskStatus
from taskboard.models.project import Project
from taskboard.models.task import Task
from taskboard.models.user import User

def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00")).astimezone(timezone.utc)

USERS = [
    ("1", "John Doe", "john@example.com", "Manager", "Development", "/avatars/john.jpg"),
    ("2", "Jane Smith", "jane@example.com", "Developer", "Development", "/avatars/jane.jpg"),
    ("3", "Mike Johnson", "mike@example.com", "Developer", "Development", "/avatars/mike.jpg"),
    ("4", "Sarah Wilson", "sarah@example.com", "Assistant Manager", "Development", "/avatars/sarah.jpg"),
    ("5", "Alex Chen", "alex@example.com", "Intern", "Design", "/avatars/alex.jpg"),
]

PROJECTS = [
    {
        "id": "1",
        "name": "Web Application",
        "description": "Main web application project for client",
        "client_company": "Tech Corp",
        "client_id": "1",
        "status": "in_progress",
        "urgency": "high",
        "budget": 50000,
        "total_revenue": 75000,
        "start_date": "2024-10-01T10:00:00Z",
        "due_date": "2024-12-31T23:59:59Z",
    },
    {
        "id": "2",
        "name": "Mobile App",
        "description": "Mobile application development project",
        "client_company": "Mobile Solutions Inc",
        "client_id": "2",
        "status": "planning",
        "urgency": "medium",
        "budget": 30000,
        "total_revenue": 45000,
        "start_date": "2024-09-15T10:00:00Z",
        "due_date": "2024-11-30T23:59:59Z",
    },
    {
        "id": "3",
        "name": "API Development",
        "description": "Backend API development and integration",
        "client_company": "Data Systems Ltd",
        "client_id": "3",
        "status": "completed",
        "urgency": "low",
        "budget": 25000,
        "total_revenue": 35000,
        "start_date": "2024-08-01T10:00:00Z",
        "due_date": "2024-10-31T23:59:59Z",
    },
]

COLLABORATORS = {
    "1": ["1", "2", "3"],
    "2": ["1", "3", "4", "5"],
    "3": ["2", "4"],
}

TASKS = [
    ("1", "1", "Implement user authentication", "Set up JWT authentication for the application",
     TaskStatus.in_progress, ["1"], "high", "feature,authentication",
     "2024-10-01T10:00:00Z", "2024-10-30T10:00:00Z", "2024-11-15T23:59:59Z"),
    ("2", "1", "Design landing page", "Create a responsive landing page design",
     TaskStatus.todo, ["2"], "medium", "design,ui",
     "2024-10-05T10:00:00Z", "2024-10-25T10:00:00Z", "2024-11-20T23:59:59Z"),
    ("3", "1", "Fix login bug", "Resolve issue with login form validation",
     TaskStatus.done, ["3"], "high", "bug,critical",
     "2024-10-08T10:00:00Z", "2024-10-28T10:00:00Z", "2024-11-10T23:59:59Z"),
    ("4", "2", "Update documentation", "Update API documentation with new endpoints",
     TaskStatus.todo, ["4"], "low", "documentation",
     "2024-10-10T10:00:00Z", "2024-10-20T10:00:00Z", "2024-11-25T23:59:59Z"),
    ("5", "2", "Mobile app wireframes", "Create wireframes for mobile application",
     TaskStatus.in_progress, ["2", "5"], "medium", "design,mobile",
     "2024-10-12T10:00:00Z", "2024-10-29T10:00:00Z", "2024-12-01T23:59:59Z"),
]

@dataclass
class SeedResult:
    users: int
    projects: int
    tasks: int

def get_or_create_user(db: Session, user_id: str, name: str, email: str, role: str,
                       department: str | None = None, avatar: str | None = None) -> User:
    u = db.get(User, user_id)
    if u is None:
        u = User(id=user_id, name=name, email=email.lower().strip(), role=role,
                 department=department, avatar=avatar)
        db.add(u)
        db.flush()
    return u

def get_or_create_project(db: Session, data: dict) -> Project:
    p = db.get(Project, data["id"])
    if p is None:
        fields = dict(data)
        fields["start_date"] = _ts(fields["start_date"])
        fields["due_date"] = _ts(fields["due_date"])
        p = Project(**fields)
        db.add(p)
        db.flush()
    return p

def seed_store(db: Session) -> SeedResult:
    users = {row[0]: get_or_create_user(db, *row) for row in USERS}

    created_projects = 0
    for data in PROJECTS:
        is_new = db.get(Project, data["id"]) is None
        p = get_or_create_project(db, data)
        if is_new:
            p.collaborators = [users[uid] for uid in COLLABORATORS.get(p.id, [])]
            created_projects += 1

    created_tasks = 0
    for (task_id, project_id, title, description, status, assignee_ids, priority, labels,
         created, updated, due) in TASKS:
        if db.get(Task, task_id) is not None:
            continue
        db.add(
            Task(
                id=task_id,
                project_id=project_id,
                title=title,
                description=description,
                status=status,
                priority=priority,
                labels=labels,
                assignees=[users[uid] for uid in assignee_ids],
                created_at=_ts(created),
                updated_at=_ts(updated),
                start_date=_ts(created),
                due_date=_ts(due),
            )
        )
        created_tasks += 1

    db.flush()
    return SeedResult(users=len(users), projects=created_projects, tasks=created_tasks)
