"""Security utilities for API."""

import re
import secrets
import time
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status

# Session ids are uuid4 hex strings
SESSION_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


def validate_session_id(session_id: str) -> bool:
    """Validate that a session id looks like one we issued."""
    if not session_id:
        return False
    return bool(SESSION_ID_PATTERN.match(session_id))


def safe_session_id(session_id: str) -> str:
    """
    Validate session id and return it, or raise HTTPException.

    Use as a dependency in routes that accept session ids.
    """
    if not validate_session_id(session_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid session id: '{session_id}'",
        )
    return session_id


class RateLimiter:
    """Simple in-memory rate limiter."""

    def __init__(self, requests_per_minute: int = 60):
        self.requests_per_minute = requests_per_minute
        self._requests: dict[str, list[float]] = {}

    def _get_client_id(self, request: Request) -> str:
        """Get client identifier from request."""
        # Use X-Forwarded-For if behind proxy, otherwise use client host
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
        return request.client.host if request.client else "unknown"

    def _cleanup_old_requests(self, client_id: str, now: float) -> None:
        """Remove requests older than 1 minute."""
        if client_id in self._requests:
            cutoff = now - 60
            self._requests[client_id] = [t for t in self._requests[client_id] if t > cutoff]

    def is_rate_limited(self, request: Request) -> bool:
        """Check if request should be rate limited."""
        now = time.time()
        client_id = self._get_client_id(request)

        self._cleanup_old_requests(client_id, now)

        if client_id not in self._requests:
            self._requests[client_id] = []

        if len(self._requests[client_id]) >= self.requests_per_minute:
            return True

        self._requests[client_id].append(now)
        return False


async def check_rate_limit(request: Request) -> None:
    """Dependency to check rate limit."""
    if request.app.state.rate_limiter.is_rate_limited(request):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many requests. Please slow down.",
        )


async def verify_api_key(
    request: Request,
    x_api_key: Annotated[str | None, Header()] = None,
) -> str | None:
    """
    Verify access key if configured.

    If ACCESS_KEY is not set in settings, all requests are allowed.
    If ACCESS_KEY is set, requests must include matching X-API-Key header.
    """
    required_key = request.app.state.settings.ACCESS_KEY

    if not required_key:
        return None

    if not x_api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="API key required",
            headers={"WWW-Authenticate": "ApiKey"},
        )

    if not secrets.compare_digest(x_api_key, required_key):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
        )

    return x_api_key


# Type alias for dependency injection
RateLimitDep = Annotated[None, Depends(check_rate_limit)]
SessionIdDep = Annotated[str, Depends(safe_session_id)]
