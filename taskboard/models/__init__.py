from taskboard.models.project import Project, project_collaborators
from taskboard.models.task import Task, task_assignees
from taskboard.models.user import User

__all__ = ["User", "Project", "Task", "project_collaborators", "task_assignees"]
