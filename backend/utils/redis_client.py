import json
from typing import Any, Dict, List, Optional
from fastapi.encoders import jsonable_encoder
from redis.asyncio import Redis
from utils.logger import get_logger

log = get_logger(__name__)

# ------------------------------------------------------------------ #
# Document helpers (all JSON-based)
# ------------------------------------------------------------------ #


async def save_document(redis: Redis, key: str, data: Any, expire_seconds: Optional[int] = None):
    """Create or overwrite a document (JSON-encoded)."""
    try:
        safe = jsonable_encoder(data)
        await redis.set(key, json.dumps(safe), ex=expire_seconds)
        log.debug(f"Document {key} saved.")
    except Exception as e:
        log.error(f"Error saving document {key}: {e}", exc_info=True)
        raise


async def get_document(redis: Redis, key: str) -> Optional[Dict[str, Any]]:
    """Retrieve a document and decode JSON back to dict."""
    try:
        raw = await redis.get(key)
        if raw:
            return json.loads(raw)
    except Exception as e:
        log.error(f"Error retrieving document {key}: {e}", exc_info=True)
        raise
    return None


async def get_documents(redis: Redis, keys: List[str]) -> List[Dict[str, Any]]:
    """Fetch many documents in one round trip, skipping missing keys."""
    if not keys:
        return []
    try:
        raws = await redis.mget(keys)
    except Exception as e:
        log.error(f"Error retrieving {len(keys)} documents: {e}", exc_info=True)
        raise
    return [json.loads(raw) for raw in raws if raw]


async def delete_document(redis: Redis, key: str) -> bool:
    """Delete a document entirely."""
    try:
        result = await redis.delete(key)
        if result:
            log.info(f"Document {key} deleted.")
            return True
    except Exception as e:
        log.error(f"Error deleting document {key}: {e}", exc_info=True)
        raise
    return False
