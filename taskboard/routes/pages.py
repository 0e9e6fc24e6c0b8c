from fastapi import APIRouter
from fastapi.responses import JSONResponse

router = APIRouter(tags=["pages"])

# redirect targets of the route guard; rendering lives in the frontend

@router.get("/login")
def login_page(callbackUrl: str | None = None) -> dict:
    return {"page": "login", "login_endpoint": "/api/auth/login", "callbackUrl": callbackUrl}

@router.get("/unauthorized")
def unauthorized_page():
    return JSONResponse(
        status_code=403,
        content={"page": "unauthorized", "detail": "you do not have access to this page"},
    )

@router.get("/auth/error")
def auth_error_page(error: str | None = None) -> dict:
    return {"page": "auth_error", "error": error}
