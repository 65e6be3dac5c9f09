# services/session_store.py
from typing import List, Optional
from datetime import datetime, timezone
from redis.asyncio import Redis
from redis.asyncio.lock import Lock

from config import get_settings
from models.session import InterviewSession, SessionSummary
from services.user_store import UserStore
from utils.redis_client import save_document, get_document, get_documents
from utils.logger import get_logger

logger = get_logger("SessionStore")


class SessionStore:
    """Interview session documents in Redis (session:{id})."""

    def __init__(self, redis: Redis):
        self.redis = redis
        self.users = UserStore(redis)

    @staticmethod
    def _key(session_id: str) -> str:
        return f"session:{session_id}"

    async def create(self, session: InterviewSession) -> InterviewSession:
        await save_document(self.redis, self._key(session.id), session)
        await self.users.add_session(session.user_id, session.id)
        logger.info(f"Session {session.id} created for user {session.user_id}")
        return session

    async def get(self, session_id: str) -> Optional[InterviewSession]:
        data = await get_document(self.redis, self._key(session_id))
        return InterviewSession(**data) if data else None

    def lock(self, session_id: str) -> Lock:
        """Per-session mutex; hold it across load → model call → save.

        Entering raises redis.exceptions.LockError when the wait runs out.
        """
        settings = get_settings()
        return self.redis.lock(
            f"lock:session:{session_id}",
            timeout=settings.session_lock_timeout_seconds,
            blocking_timeout=settings.session_lock_wait_seconds,
        )

    async def save(self, session: InterviewSession) -> InterviewSession:
        """Overwrite the document; callers mutating a stored session hold lock()."""
        session.updated_at = datetime.now(timezone.utc)
        await save_document(self.redis, self._key(session.id), session)
        return session

    async def list_for_user(self, user_id: str, limit: int) -> List[InterviewSession]:
        """Newest first."""
        ids = await self.users.session_ids(user_id, limit)
        newest = list(reversed(ids))
        docs = await get_documents(self.redis, [self._key(i) for i in newest])
        sessions = [InterviewSession(**d) for d in docs]
        return sorted(sessions, key=lambda s: s.created_at, reverse=True)

    async def history(self, user_id: str, limit: int) -> List[SessionSummary]:
        return [s.summary() for s in await self.list_for_user(user_id, limit)]
