"""API services for studio session management."""

from .session_manager import SessionManager, SessionNotFoundError

__all__ = ["SessionManager", "SessionNotFoundError"]
