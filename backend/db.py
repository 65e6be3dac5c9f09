"""
Redis connection helper (asyncio).
"""
import redis.asyncio as redis
from functools import lru_cache
from config import get_settings
from utils.logger import get_logger

log = get_logger(__name__)


@lru_cache
def get_redis() -> redis.Redis:
    cfg = get_settings()
    return redis.Redis.from_url(
        cfg.redis_url,
        decode_responses=True,   # store strings not bytes
        health_check_interval=30
    )


async def test_connection() -> bool:
    try:
        pong = await get_redis().ping()
        if pong:
            log.info("✅ Redis connection successful!")
            return True
    except Exception as e:
        log.error(f"❌ Redis connection failed: {e}", exc_info=True)
    return False
