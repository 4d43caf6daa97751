"""Data models."""

from .logo import NUM_VARIANTS, LogoPrompt, LogoVariant
from .studio import (
    BusyState,
    EnhancedState,
    ErrorState,
    GeneratedState,
    IdleState,
    StudioInputs,
    StudioMode,
    StudioState,
)

__all__ = [
    "NUM_VARIANTS",
    "LogoPrompt",
    "LogoVariant",
    "StudioMode",
    "StudioInputs",
    "StudioState",
    "IdleState",
    "BusyState",
    "ErrorState",
    "GeneratedState",
    "EnhancedState",
]
