"""Credential check against the external authentication backend."""
from __future__ import annotations

import logging
from collections.abc import Mapping

import requests

from taskboard.auth.session import AuthenticatedUser
from taskboard.config import settings

logger = logging.getLogger(__name__)

# Development-only identity for when the backend cannot be reached. It is
# only honoured outside prod and while fallback_login_enabled is on.
FALLBACK_EMAIL = "test@example.com"
FALLBACK_PASSWORD = "test123"

def fallback_identity() -> AuthenticatedUser:
    return AuthenticatedUser.build(
        id="test_user_123",
        email=FALLBACK_EMAIL,
        name="Test User",
        role="ceo",
        department="Development",
        organization_id="test_org_123",
        organization_name="Test Organization",
        access_token="test_token_123",
    )

def fallback_allowed() -> bool:
    return settings.fallback_login_enabled and settings.app_env != "prod"

def authenticate(email: str | None, password: str | None) -> AuthenticatedUser | None:
    if not email or not password:
        return None

    url = f"{settings.backend_url.rstrip('/')}/auth/login"
    try:
        resp = requests.post(
            url,
            json={"email": email, "password": password},
            timeout=settings.backend_timeout_seconds,
        )
        if not resp.ok:
            logger.warning("backend rejected login", extra={"status_code": resp.status_code})
            return None
        body = resp.json()
        if not isinstance(body, Mapping):
            raise ValueError("backend reply is not a json object")
        return AuthenticatedUser.from_backend(body)
    except (requests.RequestException, ValueError, KeyError) as e:
        logger.error("authentication backend unavailable: %s", e.__class__.__name__)

    if fallback_allowed() and email == FALLBACK_EMAIL and password == FALLBACK_PASSWORD:
        logger.warning("using fallback identity for %s", FALLBACK_EMAIL)
        return fallback_identity()
    return None
