from __future__ import annotations

import logging
import time
from typing import Callable, cast

from app.core.redis_client import get_redis
from fastapi import HTTPException, Request
from redis import Redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


def client_key(request: Request) -> str:
    # First hop of X-Forwarded-For when running behind a proxy.
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",", 1)[0].strip()
    return request.client.host if request.client else "unknown"


def rate_limiter(
    scope: str,
    *,
    limit: int,
    window_seconds: int,
) -> Callable[[Request], None]:
    """Fixed-window limiter (Redis INCR + EXPIRE) keyed by scope and client.

    Without Redis, or when Redis errors, requests go through unthrottled.
    """

    def _dep(request: Request) -> None:
        r = get_redis()
        if r is None:
            return

        now = int(time.time())
        window = now // window_seconds
        key = f"rl:{scope}:{client_key(request)}:{window}"

        try:
            hits = cast(int, cast(Redis, r).incr(key))
            if hits == 1:
                cast(Redis, r).expire(key, window_seconds)
        except RedisError as exc:
            logger.warning("rate limiter skipped for %s: %s", scope, exc)
            return

        if hits > limit:
            logger.info("rate limit hit for %s on %s", key, request.url.path)
            raise HTTPException(
                status_code=429,
                detail=f"Too many {scope} requests, slow down",
                headers={"Retry-After": str(max(1, window_seconds - now % window_seconds))},
            )

    return _dep
