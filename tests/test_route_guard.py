import pytest

from taskboard.config import settings
from taskboard.rbac.guard import AccessDecision, evaluate_access, is_excluded, is_public_route

CEO = {"sub": "c", "role": "ceo", "canAccessPerformance": True}
MANAGER = {"sub": "m", "role": "manager", "canAccessPerformance": True}
ASSISTANT = {"sub": "a", "role": "assistant_manager", "canAccessPerformance": False}
DEVELOPER = {"sub": "d", "role": "developer", "canAccessPerformance": False}

def auth(jwt: str) -> dict[str, str]:
    return {"authorization": f"bearer {jwt}"}

@pytest.mark.parametrize("path", ["/", "/login", "/sign-up", "/login-via-email", "/auth/error", "/unauthorized"])
def test_public_routes_need_no_session(path):
    assert is_public_route(path)
    assert evaluate_access(path, None) is AccessDecision.allow

def test_root_is_public_only_when_exact():
    assert is_public_route("/") is True
    assert is_public_route("/dashboard") is False
    assert evaluate_access("/dashboard", None) is AccessDecision.login

def test_login_subpaths_are_public():
    assert is_public_route("/login/callback") is True
    assert is_public_route("/loginx") is False

@pytest.mark.parametrize("path", ["/api/auth/login", "/api/auth/session", "/health", "/ready", "/docs"])
def test_infrastructure_is_excluded(path):
    assert is_excluded(path)

def test_api_resources_are_not_excluded():
    assert is_excluded("/api/tasks/get_assigned_tasks") is False
    assert is_excluded("/api/authx") is False

@pytest.mark.parametrize(
    "claims,expected",
    [
        (CEO, AccessDecision.allow),
        (MANAGER, AccessDecision.allow),
        (ASSISTANT, AccessDecision.unauthorized),
        (DEVELOPER, AccessDecision.unauthorized),
    ],
)
def test_performance_follows_the_claim(claims, expected):
    assert evaluate_access("/performance", claims) is expected
    assert evaluate_access("/performance/q3", claims) is expected

def test_performance_trusts_the_claim_over_the_role():
    assert evaluate_access("/performance", {**DEVELOPER, "canAccessPerformance": True}) is AccessDecision.allow
    assert evaluate_access("/performance", {**CEO, "canAccessPerformance": False}) is AccessDecision.unauthorized

@pytest.mark.parametrize("path", ["/add-member", "/user-management", "/user-management/invites"])
def test_management_pages(path):
    assert evaluate_access(path, CEO) is AccessDecision.allow
    assert evaluate_access(path, MANAGER) is AccessDecision.allow
    assert evaluate_access(path, ASSISTANT) is AccessDecision.allow
    assert evaluate_access(path, DEVELOPER) is AccessDecision.unauthorized
    assert evaluate_access(path, {"sub": "x", "role": "Assistant Manager"}) is AccessDecision.allow

@pytest.mark.parametrize("path", ["/admin", "/admin/settings", "/administration", "/client-management"])
def test_ceo_only_pages(path):
    assert evaluate_access(path, CEO) is AccessDecision.allow
    assert evaluate_access(path, {"sub": "x", "role": "CEO"}) is AccessDecision.allow
    assert evaluate_access(path, MANAGER) is AccessDecision.unauthorized
    assert evaluate_access(path, ASSISTANT) is AccessDecision.unauthorized

def test_other_pages_only_need_a_session():
    assert evaluate_access("/tasks", DEVELOPER) is AccessDecision.allow
    assert evaluate_access("/tasks", None) is AccessDecision.login
    assert evaluate_access("/admin", None) is AccessDecision.login

def test_missing_role_is_denied_on_role_pages():
    assert evaluate_access("/admin", {"sub": "x"}) is AccessDecision.unauthorized
    assert evaluate_access("/projects", {"sub": "x"}) is AccessDecision.allow

def test_manager_on_admin_redirects_to_unauthorized(client, manager_jwt):
    r = client.get("/admin", headers=auth(manager_jwt))
    assert r.status_code == 307
    assert r.headers["location"] == "/unauthorized"

def test_unauthorized_page_is_reachable(client, manager_jwt):
    r = client.get("/unauthorized", headers=auth(manager_jwt))
    assert r.status_code == 403
    assert r.json()["page"] == "unauthorized"

def test_no_session_redirects_to_login_with_callback(client):
    r = client.get("/user-management")
    assert r.status_code == 307
    assert r.headers["location"] == "/login?callbackUrl=%2Fuser-management"

    r = client.get("/login", params={"callbackUrl": "/user-management"})
    assert r.status_code == 200
    assert r.json()["callbackUrl"] == "/user-management"

def test_invalid_token_counts_as_no_session(client):
    r = client.get("/tasks", headers=auth("not-a-jwt"))
    assert r.status_code == 307
    assert r.headers["location"].startswith("/login?")

def test_ceo_passes_through_to_the_app(client, ceo_jwt):
    # no page is mounted at /admin, so passing the guard ends in a 404
    r = client.get("/admin", headers=auth(ceo_jwt))
    assert r.status_code == 404

def test_developer_cannot_open_performance(client, developer_jwt):
    r = client.get("/performance", headers=auth(developer_jwt))
    assert r.status_code == 307
    assert r.headers["location"] == "/unauthorized"

def test_api_resources_require_a_session(client):
    r = client.get("/api/tasks/get_assigned_tasks")
    assert r.status_code == 307
    assert r.headers["location"] == "/login?callbackUrl=%2Fapi%2Ftasks%2Fget_assigned_tasks"

def test_auth_api_is_never_redirected(client):
    r = client.get("/api/auth/session")
    assert r.status_code == 401

def test_session_cookie_is_honoured(client, developer_jwt):
    client.cookies.set(settings.session_cookie_name, developer_jwt)
    r = client.get("/api/tasks/get_assigned_tasks")
    assert r.status_code == 200
