from __future__ import annotations

import hashlib
import logging

import redis
from fastapi import HTTPException, Request

from taskboard.config import settings
from taskboard.redis_client import redis_client

logger = logging.getLogger(__name__)

def client_key(request: Request) -> str:
    # first hop of x-forwarded-for when behind a proxy
    forwarded = request.headers.get("x-forwarded-for", "")
    ip = forwarded.split(",")[0].strip() or (request.client.host if request.client else "unknown")
    return hashlib.sha256(ip.encode("utf-8")).hexdigest()[:24]

def hit(name: str, key: str, window_seconds: int) -> int:
    rl_key = f"rl:{name}:{key}"
    pipe = redis_client.pipeline()
    pipe.incr(rl_key)
    pipe.expire(rl_key, window_seconds, nx=True)
    count, _ = pipe.execute()
    return int(count)

# fixed-window limiter, fails open when redis is unreachable
def rate_limit(name: str, limit_per_window: int, window_seconds: int = 60):
    async def _dep(request: Request) -> None:
        if not settings.rate_limit_enabled:
            return

        try:
            count = hit(name, client_key(request), window_seconds)
        except redis.RedisError as e:
            logger.warning("rate limiter unavailable: %s", e.__class__.__name__)
            return

        if count > limit_per_window:
            logger.warning("rate limited", extra={"path": request.url.path})
            raise HTTPException(status_code=429, detail="rate_limited")

    return _dep
