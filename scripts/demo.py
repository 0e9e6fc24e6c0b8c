from __future__ import annotations

import os
import time

import requests
from rich import print

BASE = os.getenv("API_BASE_URL", "http://127.0.0.1:8000")
EMAIL = os.getenv("DEMO_EMAIL", "test@example.com")
PASSWORD = os.getenv("DEMO_PASSWORD", "test123")

def _headers(jwt: str | None) -> dict[str, str]:
    headers = {"content-type": "application/json"}
    if jwt:
        headers["authorization"] = f"bearer {jwt}"
    return headers

def post(path: str, *, jwt: str | None = None, json: dict | None = None) -> requests.Response:
    return requests.post(f"{BASE}{path}", headers=_headers(jwt), json=json, timeout=10, allow_redirects=False)

def patch(path: str, *, jwt: str | None = None, json: dict | None = None) -> requests.Response:
    return requests.patch(f"{BASE}{path}", headers=_headers(jwt), json=json, timeout=10, allow_redirects=False)

def get(path: str, *, jwt: str | None = None) -> requests.Response:
    return requests.get(f"{BASE}{path}", headers=_headers(jwt), timeout=10, allow_redirects=False)

def login(email: str, password: str) -> str:
    r = post("/api/auth/login", json={"email": email, "password": password})
    r.raise_for_status()
    return r.json()["access_token"]

def wait_ready(timeout_s: float = 30.0) -> None:
    deadline = time.time() + timeout_s
    last_err: Exception | None = None

    while time.time() < deadline:
        try:
            if get("/ready").status_code == 200:
                return
        except requests.RequestException as e:
            last_err = e
        time.sleep(0.5)

    if last_err:
        raise RuntimeError(f"api not ready after {timeout_s}s (last error: {last_err})")
    raise RuntimeError(f"api not ready after {timeout_s}s")

def main() -> None:
    print("[bold]demo: login -> permissions -> projects -> create task -> assign -> move to done[/bold]")

    wait_ready()
    print("[green]ready ok[/green]")

    jwt = login(EMAIL, PASSWORD)
    print("authed as:", EMAIL)

    r = get("/api/auth/permissions", jwt=jwt)
    r.raise_for_status()
    perms = r.json()
    print("role:", perms["display_role"], "invitable:", perms["invitable_roles"])

    r = get("/api/projects/get_projects", jwt=jwt)
    r.raise_for_status()
    projects = r.json()
    print("projects:", [p["title"] for p in projects])
    if not projects:
        print("[yellow]no projects visible, stopping[/yellow]")
        return
    project_id = projects[0]["project_id"]

    r = post(
        "/api/tasks/create_task",
        jwt=jwt,
        json={"title": "demo task", "description": "created by the demo script", "project_id": project_id},
    )
    r.raise_for_status()
    task_id = r.json()["task_id"]
    print("created task:", task_id)

    r = get(f"/api/projects/get_project_collaborators/{project_id}", jwt=jwt)
    r.raise_for_status()
    user_ids = [u["user_id"] for u in r.json()][:2]
    if user_ids:
        post(f"/api/tasks/add_assignees_to_task/{task_id}", jwt=jwt, json={"user_ids": user_ids}).raise_for_status()
        print("assigned:", user_ids)

    patch(f"/api/tasks/update_task_status/{task_id}", jwt=jwt, json={"status": "done"}).raise_for_status()
    print("moved to done")

    r = get("/admin", jwt=jwt)
    print("/admin ->", r.status_code, r.headers.get("location"))
    print("[bold green]demo complete[/bold green]")

if __name__ == "__main__":
    main()
