from dataclasses import dataclass, field
from enum import Enum

from taskboard.models.enums import Role
from taskboard.rbac.roles import MANAGEMENT_ROLES, display_role, parse_role

class TaskBoardPermission(str, Enum):
    create_task = "create_task"
    edit_task = "edit_task"
    assign_users = "assign_users"
    view_all_projects = "view_all_projects"
    view_all_tasks = "view_all_tasks"
    update_task_status = "update_task_status"
    search_all_users = "search_all_users"
    search_department_users = "search_department_users"

_LEADERSHIP = frozenset({Role.ceo, Role.manager})

@dataclass(frozen=True)
class UserSearchScope:
    can_search_all_departments: bool
    department_restriction: bool
    allowed_roles: list[str] = field(default_factory=list)

def can_create_task(user_role: str | Role | None, is_assigned_project: bool = False) -> bool:
    role = parse_role(user_role)
    if role in _LEADERSHIP:
        return True
    if role == Role.assistant_manager:
        return bool(is_assigned_project)
    return False

def can_edit_task(user_role: str | Role | None) -> bool:
    return parse_role(user_role) in MANAGEMENT_ROLES

def can_assign_users(user_role: str | Role | None) -> bool:
    return parse_role(user_role) in MANAGEMENT_ROLES

def can_view_all_projects(user_role: str | Role | None) -> bool:
    return parse_role(user_role) in _LEADERSHIP

def can_view_all_tasks(user_role: str | Role | None) -> bool:
    # assistant managers see every task of the projects they are on
    return parse_role(user_role) in MANAGEMENT_ROLES

def can_update_task_status(user_role: str | Role | None) -> bool:
    return True

def can_search_all_users(user_role: str | Role | None) -> bool:
    return parse_role(user_role) in _LEADERSHIP

def can_search_department_users(user_role: str | Role | None) -> bool:
    return parse_role(user_role) in MANAGEMENT_ROLES

def can_access_user_search(user_role: str | Role | None) -> bool:
    return can_search_all_users(user_role) or can_search_department_users(user_role)

def get_user_search_scope(user_role: str | Role | None) -> UserSearchScope:
    role = parse_role(user_role)
    if role in _LEADERSHIP:
        return UserSearchScope(
            can_search_all_departments=True,
            department_restriction=False,
            allowed_roles=[Role.developer.value, Role.intern.value, Role.assistant_manager.value],
        )
    if role == Role.assistant_manager:
        return UserSearchScope(
            can_search_all_departments=False,
            department_restriction=True,
            allowed_roles=[Role.developer.value, Role.intern.value],
        )
    return UserSearchScope(can_search_all_departments=False, department_restriction=True, allowed_roles=[])

def get_task_fetching_strategy(user_role: str | Role | None) -> str:
    if parse_role(user_role) in MANAGEMENT_ROLES:
        return "project"
    return "assigned"

def has_task_board_permission(
    user_role: str | Role | None,
    permission: str,
    is_assigned_project: bool = False,
) -> bool:
    try:
        perm = TaskBoardPermission(permission)
    except ValueError:
        return False

    if perm is TaskBoardPermission.create_task:
        return can_create_task(user_role, is_assigned_project)
    return _CHECKS[perm](user_role)

_CHECKS = {
    TaskBoardPermission.edit_task: can_edit_task,
    TaskBoardPermission.assign_users: can_assign_users,
    TaskBoardPermission.view_all_projects: can_view_all_projects,
    TaskBoardPermission.view_all_tasks: can_view_all_tasks,
    TaskBoardPermission.update_task_status: can_update_task_status,
    TaskBoardPermission.search_all_users: can_search_all_users,
    TaskBoardPermission.search_department_users: can_search_department_users,
}

def get_task_board_permissions(user_role: str | Role | None, is_assigned_project: bool = False) -> dict:
    return {
        "display_role": display_role(user_role),
        "can_create_task": can_create_task(user_role, is_assigned_project),
        "can_edit_task": can_edit_task(user_role),
        "can_assign_users": can_assign_users(user_role),
        "can_view_all_projects": can_view_all_projects(user_role),
        "can_view_all_tasks": can_view_all_tasks(user_role),
        "can_update_task_status": can_update_task_status(user_role),
        "can_search_all_users": can_search_all_users(user_role),
        "can_search_department_users": can_search_department_users(user_role),
        "can_access_user_search": can_access_user_search(user_role),
        "task_fetching_strategy": get_task_fetching_strategy(user_role),
    }
