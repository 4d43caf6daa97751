"""Session Manager - in-memory registry of studio sessions."""

import asyncio
import logging

from ...agents.base import BaseLogoAgent
from ...services.studio import StudioSession

logger = logging.getLogger(__name__)


class SessionNotFoundError(KeyError):
    """Raised when a session id is unknown or was evicted."""

    pass


class SessionManager:
    """
    Keeps studio sessions in memory for the lifetime of the process.

    Sessions are never persisted. When the registry is full, the oldest
    session is dropped to make room.
    """

    def __init__(self, max_sessions: int = 500, max_upload_bytes: int = 10 * 1024 * 1024):
        if max_sessions < 1:
            raise ValueError(f"max_sessions must be at least 1, got {max_sessions}")
        self.max_sessions = max_sessions
        self.max_upload_bytes = max_upload_bytes
        self._sessions: dict[str, StudioSession] = {}
        self._lock = asyncio.Lock()

    async def create(self, agent: BaseLogoAgent) -> StudioSession:
        """Create and register a new session."""
        session = StudioSession(agent, max_upload_bytes=self.max_upload_bytes)

        async with self._lock:
            while len(self._sessions) >= self.max_sessions:
                self._evict_oldest()
            self._sessions[session.id] = session

        logger.info(f"Studio session created: {session.id}")
        return session

    def get(self, session_id: str) -> StudioSession:
        """Look up a session."""
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(session_id) from None

    async def delete(self, session_id: str) -> None:
        """Forget a session."""
        async with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise SessionNotFoundError(session_id)
        logger.info(f"Studio session deleted: {session_id}")

    def _evict_oldest(self) -> None:
        """Drop the oldest session (dicts keep insertion order)."""
        oldest = next(iter(self._sessions))
        self._sessions.pop(oldest, None)
        logger.info(f"Studio session evicted: {oldest}")

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions
