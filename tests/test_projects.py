from sqlalchemy import select

from taskboard.db import count_rows
from taskboard.models.project import Project
from taskboard.models.user import User

def auth(jwt: str) -> dict[str, str]:
    return {"authorization": f"bearer {jwt}"}

def test_management_sees_every_project(client, manager_jwt, ceo_jwt):
    for jwt in (manager_jwt, ceo_jwt):
        r = client.get("/api/projects/get_projects", headers=auth(jwt))
        assert r.status_code == 200, r.text
        assert [p["project_id"] for p in r.json()] == ["1", "2", "3"]

    first = client.get("/api/projects/get_projects", headers=auth(manager_jwt)).json()[0]
    assert first["id"] == "1"
    assert first["title"] == first["name"] == "Web Application"
    assert first["client_company"] == "Tech Corp"
    assert first["urgency"] == "high"

def test_others_see_only_their_projects(client, developer_jwt, assistant_manager_jwt, intern_jwt):
    r = client.get("/api/projects/get_projects", headers=auth(developer_jwt))
    assert [p["project_id"] for p in r.json()] == ["1", "3"]

    r = client.get("/api/projects/get_projects", headers=auth(assistant_manager_jwt))
    assert [p["project_id"] for p in r.json()] == ["2", "3"]

    r = client.get("/api/projects/get_projects", headers=auth(intern_jwt))
    assert [p["project_id"] for p in r.json()] == ["2"]

def test_create_project(client, db_session, manager_jwt):
    r = client.post(
        "/api/projects/create_project",
        json={"title": "Data Warehouse", "client_company": "Acme", "collaborator_ids": ["2", 5]},
        headers=auth(manager_jwt),
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["project_id"] == "4"
    assert body["name"] == "Data Warehouse"
    assert body["urgency"] == "medium"
    assert body["status"] == "in_progress"

    r = client.get("/api/projects/get_project_collaborators/4", headers=auth(manager_jwt))
    assert [c["user_id"] for c in r.json()] == ["2", "5"]

def test_create_project_accepts_legacy_name(client, manager_jwt):
    r = client.post("/api/projects/create_project", json={"name": "Legacy"}, headers=auth(manager_jwt))
    assert r.status_code == 200
    assert r.json()["title"] == "Legacy"

def test_create_project_validation_and_roles(client, db_session, manager_jwt, developer_jwt):
    r = client.post("/api/projects/create_project", json={"title": "  "}, headers=auth(manager_jwt))
    assert r.status_code == 400
    assert r.json()["detail"] == "title is required"

    r = client.post("/api/projects/create_project", json={"title": "Side project"}, headers=auth(developer_jwt))
    assert r.status_code == 403
    assert count_rows(db_session, Project) == 3

def test_project_collaborators(client, manager_jwt):
    r = client.get("/api/projects/get_project_collaborators/1", headers=auth(manager_jwt))
    assert r.status_code == 200, r.text
    rows = r.json()
    assert [c["user_id"] for c in rows] == ["1", "2", "3"]
    assert rows[0]["username"] == "john.doe"
    assert rows[0]["full_name"] == "John Doe"
    assert rows[0]["profile_picture"] == "/avatars/john.jpg"

def test_project_collaborators_unknown_project(client, manager_jwt):
    r = client.get("/api/projects/get_project_collaborators/99", headers=auth(manager_jwt))
    assert r.status_code == 404
    assert r.json()["detail"] == "project not found"

def test_invite_within_department(client, db_session, assistant_manager_jwt):
    r = client.post(
        "/api/users/invite",
        json={"email": "New.Dev@Example.com", "role_name": "developer", "department_name": "Sales"},
        headers=auth(assistant_manager_jwt),
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["id"] == "6"
    assert body["email"] == "new.dev@example.com"
    assert body["name"] == "new.dev"
    assert body["role"] == "Developer"
    # only the ceo may pick another department
    assert body["department"] == "Development"

def test_ceo_invites_into_any_department(client, ceo_jwt):
    r = client.post(
        "/api/users/invite",
        json={"email": "boss2@example.com", "name": "Pat", "role_name": "Manager", "department_name": "Sales"},
        headers=auth(ceo_jwt),
    )
    assert r.status_code == 200, r.text
    assert r.json()["department"] == "Sales"
    assert r.json()["role"] == "Manager"

def test_invite_outside_allowed_roles(client, db_session, assistant_manager_jwt, developer_jwt, manager_jwt):
    cases = [
        (assistant_manager_jwt, "manager"),
        (assistant_manager_jwt, "assistant_manager"),
        (manager_jwt, "ceo"),
        (manager_jwt, "manager"),
        (developer_jwt, "intern"),
    ]
    for jwt, role in cases:
        r = client.post(
            "/api/users/invite",
            json={"email": "x@example.com", "role_name": role},
            headers=auth(jwt),
        )
        assert r.status_code == 403, role
    assert count_rows(db_session, User) == 5

def test_invite_existing_email(client, db_session, manager_jwt):
    r = client.post(
        "/api/users/invite",
        json={"email": "JANE@example.com", "role_name": "developer"},
        headers=auth(manager_jwt),
    )
    assert r.status_code == 409
    assert r.json()["detail"] == "user already exists"
    assert db_session.scalar(select(User).where(User.email == "jane@example.com")).id == "2"
