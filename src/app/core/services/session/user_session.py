import secrets

from loguru import logger

from src.app.core.models.session import UserSession
from src.app.core.storage.session_storage import SessionStorage
from src.app.runtime.context import get_config


class UserSessionService:
    """Service for managing signed-in user sessions."""

    def __init__(self, session_storage: SessionStorage) -> None:
        self._storage = session_storage

    @staticmethod
    def _key(session_id: str) -> str:
        return f"user:{session_id}"

    async def create_user_session(self, user_id: str) -> str:
        """Create a session for ``user_id`` and return its id."""
        max_age = get_config().app.session_max_age
        user_session = UserSession.create(
            session_id=secrets.token_urlsafe(32),
            user_id=user_id,
            session_max_age=max_age,
        )
        await self._storage.set(self._key(user_session.id), user_session, max_age)
        logger.bind(user_id=user_id).info("session.created")
        return user_session.id

    async def get_user_session(self, session_id: str) -> UserSession | None:
        """Get a live session by id, refreshing its last-access time.

        Returns:
            User session or None if not found/expired
        """
        user_session = await self._storage.get(self._key(session_id), UserSession)
        if not user_session:
            return None

        if user_session.is_expired():
            await self._storage.delete(self._key(session_id))
            return None

        user_session.update_access()
        ttl = max(1, user_session.expires_at - user_session.last_accessed_at)
        await self._storage.set(self._key(user_session.id), user_session, ttl)
        return user_session

    async def delete_user_session(self, session_id: str) -> None:
        await self._storage.delete(self._key(session_id))

    async def purge_expired(self) -> None:
        """Cleanup expired sessions from storage."""
        await self._storage.cleanup_expired()
