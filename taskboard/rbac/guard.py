"""Path-level authentication and authorization for every request.

``evaluate_access`` is the pure decision; ``RouteGuardMiddleware`` applies it
and turns denials into redirects. Authorization failures are control flow,
not errors, so nothing here raises.
"""
import logging
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any
from urllib.parse import urlencode

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from taskboard.auth.tokens import request_claims
from taskboard.models.enums import Role
from taskboard.rbac.roles import MANAGEMENT_ROLES, parse_role

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"
UNAUTHORIZED_PATH = "/unauthorized"

PUBLIC_ROUTES: tuple[str, ...] = (
    "/",
    "/login",
    "/sign-up",
    "/login-via-email",
    "/auth/error",
    "/unauthorized",
)

# infrastructure the guard never looks at
EXCLUDED_PREFIXES: tuple[str, ...] = (
    "/api/auth",
    "/health",
    "/ready",
    "/docs",
    "/redoc",
    "/openapi.json",
    "/favicon.ico",
)

class AccessDecision(str, Enum):
    allow = "allow"
    login = "login"
    unauthorized = "unauthorized"

def _performance(claims: Mapping[str, Any]) -> bool:
    return bool(claims.get("canAccessPerformance"))

def _management(claims: Mapping[str, Any]) -> bool:
    return parse_role(claims.get("role")) in MANAGEMENT_ROLES

def _ceo_only(claims: Mapping[str, Any]) -> bool:
    return parse_role(claims.get("role")) == Role.ceo

# evaluated in order; every matching rule must pass
PATH_RULES: tuple[tuple[str, Callable[[Mapping[str, Any]], bool]], ...] = (
    ("/performance", _performance),
    ("/add-member", _management),
    ("/user-management", _management),
    ("/admin", _ceo_only),
    ("/client-management", _ceo_only),
)

def _matches(pathname: str, route: str) -> bool:
    # "/" itself only matches exactly
    return pathname == route or pathname.startswith(route + "/")

def is_public_route(pathname: str) -> bool:
    return any(_matches(pathname, route) for route in PUBLIC_ROUTES)

def is_excluded(pathname: str) -> bool:
    return any(_matches(pathname, prefix) for prefix in EXCLUDED_PREFIXES)

def evaluate_access(pathname: str, claims: Mapping[str, Any] | None) -> AccessDecision:
    if is_public_route(pathname):
        return AccessDecision.allow
    if claims is None:
        return AccessDecision.login

    for prefix, rule in PATH_RULES:
        # plain prefix match, "/administration" is guarded like "/admin"
        if pathname.startswith(prefix) and not rule(claims):
            return AccessDecision.unauthorized
    return AccessDecision.allow

class RouteGuardMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        pathname = request.url.path
        if is_excluded(pathname):
            return await call_next(request)

        claims = request_claims(request)
        decision = evaluate_access(pathname, claims)

        if decision is AccessDecision.login:
            logger.info("redirecting to login", extra={"path": pathname, "decision": decision.value})
            target = f"{LOGIN_PATH}?{urlencode({'callbackUrl': pathname})}"
            return RedirectResponse(target, status_code=307)

        if decision is AccessDecision.unauthorized:
            logger.info(
                "access denied",
                extra={"path": pathname, "decision": decision.value, "role": claims.get("role")},
            )
            return RedirectResponse(UNAUTHORIZED_PATH, status_code=307)

        request.state.session_claims = claims
        return await call_next(request)
