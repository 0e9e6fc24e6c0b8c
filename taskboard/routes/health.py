from fastapi import APIRouter
from fastapi.responses import JSONResponse

from taskboard.config import settings
from taskboard.db import db_ping
from taskboard.redis_client import redis_ping

router = APIRouter(tags=["health"])

@router.get("/health")
def health() -> dict:
    return {"status": "ok", "env": settings.app_env}

# readiness: the store gates it, redis is reported only
@router.get("/ready")
def ready():
    checks = {"db": db_ping(), "redis": redis_ping()}
    ok = checks["db"]
    body = {"status": "ok" if ok else "unready", "checks": checks}
    return JSONResponse(status_code=200 if ok else 503, content=body)
