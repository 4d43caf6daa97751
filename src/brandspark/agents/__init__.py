"""Agents that talk to the hosted image services."""

from ..api.config import Settings
from .base import (
    BaseLogoAgent,
    DataUrlFormatError,
    LogoServiceError,
    NoImageReturnedError,
    ProviderNotConfiguredError,
    decode_data_url,
    load_image_as_data_url,
    parse_data_url,
    to_data_url,
)
from .gemini import GeminiLogoAgent
from .openai_agent import OpenAILogoAgent


def create_logo_agent(settings: Settings) -> BaseLogoAgent:
    """Build the agent selected by IMAGE_PROVIDER, injecting its API key."""
    if settings.IMAGE_PROVIDER == "gemini":
        return GeminiLogoAgent(
            api_key=settings.GEMINI_API_KEY,
            image_model=settings.GEMINI_IMAGE_MODEL,
            edit_model=settings.GEMINI_EDIT_MODEL,
        )
    if settings.IMAGE_PROVIDER == "openai":
        return OpenAILogoAgent(
            api_key=settings.OPENAI_API_KEY,
            model=settings.OPENAI_IMAGE_MODEL,
        )
    raise ProviderNotConfiguredError(f"Unknown image provider: {settings.IMAGE_PROVIDER}")


__all__ = [
    "BaseLogoAgent",
    "GeminiLogoAgent",
    "OpenAILogoAgent",
    "create_logo_agent",
    "LogoServiceError",
    "DataUrlFormatError",
    "NoImageReturnedError",
    "ProviderNotConfiguredError",
    "parse_data_url",
    "decode_data_url",
    "to_data_url",
    "load_image_as_data_url",
]
