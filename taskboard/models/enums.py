from enum import Enum

class Role(str, Enum):
    ceo = "ceo"
    manager = "manager"
    assistant_manager = "assistant_manager"
    developer = "developer"
    intern = "intern"

class Permission(str, Enum):
    all_departments = "all_departments"
    own_department = "own_department"
    can_invite_manager = "can_invite_manager"
    can_invite_assistant_manager = "can_invite_assistant_manager"
    can_invite_developer = "can_invite_developer"
    can_invite_intern = "can_invite_intern"

class TaskStatus(str, Enum):
    todo = "todo"
    in_progress = "in_progress"
    done = "done"
