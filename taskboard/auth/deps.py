import jwt
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from taskboard.auth.session import AuthenticatedUser
from taskboard.auth.tokens import decode_session_token
from taskboard.config import settings

bearer = HTTPBearer(auto_error=False)

def get_current_user(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> AuthenticatedUser:
    token = creds.credentials if creds is not None else request.cookies.get(settings.session_cookie_name)
    if not token:
        raise HTTPException(status_code=401, detail="missing session token")

    try:
        payload = decode_session_token(token)
        return AuthenticatedUser.from_claims(payload)
    except (jwt.PyJWTError, KeyError, ValueError):
        raise HTTPException(status_code=401, detail="invalid session token")
