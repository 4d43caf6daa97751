"""Shared FastAPI dependencies."""

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from ..agents import create_logo_agent
from ..agents.base import BaseLogoAgent, ProviderNotConfiguredError
from .services.session_manager import SessionManager

logger = logging.getLogger(__name__)


def get_logo_agent(request: Request) -> BaseLogoAgent:
    """Return the app's logo agent, building it on first use."""
    agent = getattr(request.app.state, "logo_agent", None)
    if agent is None:
        try:
            agent = create_logo_agent(request.app.state.settings)
        except ProviderNotConfiguredError as e:
            logger.error(f"Image provider not available: {e}")
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=f"Image provider not configured: {e}",
            ) from e
        request.app.state.logo_agent = agent
    return agent


def get_session_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


LogoAgentDep = Annotated[BaseLogoAgent, Depends(get_logo_agent)]
SessionManagerDep = Annotated[SessionManager, Depends(get_session_manager)]
