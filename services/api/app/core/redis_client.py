from __future__ import annotations

import logging
from functools import lru_cache

import redis
from app.core.config import settings
from redis import Redis

logger = logging.getLogger(__name__)


@lru_cache
def get_redis() -> Redis | None:
    try:
        client: Redis = redis.from_url(
            settings.redis_url, decode_responses=True, socket_connect_timeout=1
        )
        client.ping()
        return client
    except Exception as exc:
        logger.warning("Redis unavailable; external catalog rate limiting disabled: %s", exc)
        return None
