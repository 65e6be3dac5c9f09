# services/user_store.py
from typing import List, Optional
from datetime import datetime, timezone
from redis.asyncio import Redis

from models.user import User
from utils.redis_client import save_document, get_document, delete_document
from utils.logger import get_logger

logger = get_logger("UserStore")


class DuplicateEmailError(Exception):
    pass


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserStore:
    """User documents in Redis.

    Keys:
      user:{id}             -> user document
      user:email:{email}    -> user id
      user:{id}:sessions    -> list of owned session ids, oldest first
    """

    def __init__(self, redis: Redis):
        self.redis = redis

    @staticmethod
    def _key(user_id: str) -> str:
        return f"user:{user_id}"

    @staticmethod
    def _email_key(email: str) -> str:
        return f"user:email:{normalize_email(email)}"

    @staticmethod
    def _sessions_key(user_id: str) -> str:
        return f"user:{user_id}:sessions"

    async def create(self, user: User) -> User:
        """Persist a new user; the email index is claimed first so duplicates lose."""
        claimed = await self.redis.set(self._email_key(user.email), user.id, nx=True)
        if not claimed:
            raise DuplicateEmailError(user.email)
        try:
            await save_document(self.redis, self._key(user.id), user)
        except Exception:
            await delete_document(self.redis, self._email_key(user.email))
            raise
        logger.info(f"✅ Created user {user.id}")
        return user

    async def get(self, user_id: str) -> Optional[User]:
        data = await get_document(self.redis, self._key(user_id))
        return User(**data) if data else None

    async def find_by_email(self, email: str) -> Optional[User]:
        user_id = await self.redis.get(self._email_key(email))
        if not user_id:
            return None
        return await self.get(user_id)

    async def add_session(self, user_id: str, session_id: str) -> None:
        await self.redis.rpush(self._sessions_key(user_id), session_id)
        data = await get_document(self.redis, self._key(user_id))
        if data:
            data["updated_at"] = datetime.now(timezone.utc)
            await save_document(self.redis, self._key(user_id), data)

    async def session_ids(self, user_id: str, limit: Optional[int] = None) -> List[str]:
        """Owned ids, oldest first; with a limit only the newest `limit` ids."""
        if limit is not None:
            if limit <= 0:
                return []
            return await self.redis.lrange(self._sessions_key(user_id), -limit, -1)
        return await self.redis.lrange(self._sessions_key(user_id), 0, -1)
