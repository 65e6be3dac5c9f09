import time
from typing import Optional
from fastapi import HTTPException, status
from redis.asyncio import Redis

from config import get_settings
from utils.logger import get_logger

log = get_logger(__name__)


async def check_rate_limit(redis: Redis, uid: str, key: str, limit: Optional[int] = None, window_seconds: Optional[int] = None):
    """Enforce a simple per-UID rate limit using Redis.

    Args:
        redis: Redis connection holding the counters.
        uid: Authenticated user id.
        key: Action key (e.g., "start", "respond", "end").
        limit: Max number of allowed hits in the window.
        window_seconds: Window duration in seconds.
    Raises:
        HTTPException 429 when over limit.
    """
    if not uid:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Unauthorized")

    settings = get_settings()
    if limit is None:
        limit = settings.llm_rate_limit
    if window_seconds is None:
        window_seconds = settings.llm_rate_window_seconds

    bucket = f"rate:{uid}:{key}:{int(time.time() // window_seconds)}"
    try:
        current = await redis.incr(bucket)
        if current == 1:
            await redis.expire(bucket, window_seconds)
    except Exception as e:
        # Fail open on Redis issues
        log.warning(f"Rate limit check skipped for {uid}:{key}: {e}")
        return
    if current > limit:
        raise HTTPException(status.HTTP_429_TOO_MANY_REQUESTS, "Rate limit exceeded")
