import jwt
from datetime import timedelta
from fastapi import Request

from taskboard.auth.session import AuthenticatedUser
from taskboard.config import settings
from taskboard.models.base import now_utc

def issue_session_token(user: AuthenticatedUser) -> str:
    iat = now_utc()
    exp = iat + timedelta(minutes=settings.jwt_expires_minutes)
    payload = user.to_claims()
    payload.update(
        {
            "iss": settings.jwt_issuer,
            "aud": settings.jwt_audience,
            "iat": int(iat.timestamp()),
            "exp": int(exp.timestamp()),
        }
    )
    return jwt.encode(payload, settings.jwt_secret, algorithm="HS256")

def decode_session_token(token: str) -> dict:
    return jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=["HS256"],
        audience=settings.jwt_audience,
        issuer=settings.jwt_issuer,
    )

def read_request_token(request: Request) -> str | None:
    # bearer header wins over the cookie
    header = request.headers.get("authorization")
    if header:
        scheme, _, value = header.partition(" ")
        if scheme.lower() == "bearer" and value.strip():
            return value.strip()
    cookie = request.cookies.get(settings.session_cookie_name)
    return cookie or None

def request_claims(request: Request) -> dict | None:
    token = read_request_token(request)
    if token is None:
        return None
    try:
        return decode_session_token(token)
    except jwt.PyJWTError:
        return None
