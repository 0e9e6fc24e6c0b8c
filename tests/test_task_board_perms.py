import pytest

from taskboard.rbac.task_board import (
    can_access_user_search,
    can_assign_users,
    can_create_task,
    can_edit_task,
    can_update_task_status,
    can_view_all_projects,
    can_view_all_tasks,
    get_task_board_permissions,
    get_task_fetching_strategy,
    get_user_search_scope,
    has_task_board_permission,
)

def test_create_task_depends_on_project_assignment_for_assistant_managers():
    assert can_create_task("ceo") is True
    assert can_create_task("Manager") is True
    assert can_create_task("Assistant Manager") is False
    assert can_create_task("Assistant Manager", is_assigned_project=True) is True
    assert can_create_task("developer", is_assigned_project=True) is False
    assert can_create_task("intern", is_assigned_project=True) is False

@pytest.mark.parametrize("role", ["ceo", "manager", "assistant_manager", "Assistant Manager"])
def test_management_can_edit_and_assign(role):
    assert can_edit_task(role) is True
    assert can_assign_users(role) is True
    assert can_view_all_tasks(role) is True
    assert get_task_fetching_strategy(role) == "project"

@pytest.mark.parametrize("role", ["developer", "intern", "", "unknown"])
def test_contributors_only_see_assigned_work(role):
    assert can_edit_task(role) is False
    assert can_assign_users(role) is False
    assert can_view_all_projects(role) is False
    assert can_access_user_search(role) is False
    assert get_task_fetching_strategy(role) == "assigned"

def test_every_role_can_move_tasks():
    for role in ["ceo", "manager", "assistant_manager", "developer", "intern", ""]:
        assert can_update_task_status(role) is True

def test_user_search_scope():
    leadership = get_user_search_scope("manager")
    assert leadership.can_search_all_departments is True
    assert leadership.department_restriction is False
    assert set(leadership.allowed_roles) == {"developer", "intern", "assistant_manager"}

    assistant = get_user_search_scope("Assistant Manager")
    assert assistant.can_search_all_departments is False
    assert assistant.department_restriction is True
    assert set(assistant.allowed_roles) == {"developer", "intern"}

    nobody = get_user_search_scope("intern")
    assert nobody.allowed_roles == []
    assert nobody.department_restriction is True

def test_has_task_board_permission_dispatch():
    assert has_task_board_permission("manager", "view_all_projects") is True
    assert has_task_board_permission("assistant_manager", "view_all_projects") is False
    assert has_task_board_permission("assistant_manager", "create_task", is_assigned_project=True) is True
    assert has_task_board_permission("developer", "update_task_status") is True
    assert has_task_board_permission("ceo", "delete_everything") is False

def test_permission_summary():
    summary = get_task_board_permissions("Assistant Manager")
    assert summary["display_role"] == "Assistant Manager"
    assert summary["can_create_task"] is False
    assert summary["can_assign_users"] is True
    assert summary["can_search_all_users"] is False
    assert summary["can_search_department_users"] is True
    assert summary["task_fetching_strategy"] == "project"
