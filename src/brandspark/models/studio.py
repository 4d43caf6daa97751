"""Studio state: a tagged union over what the user is looking at."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

StudioMode = Literal["generate", "enhance"]


class IdleState(BaseModel):
    """Input screen."""

    status: Literal["idle"] = "idle"


class BusyState(BaseModel):
    """A request is in flight."""

    status: Literal["busy"] = "busy"
    mode: StudioMode


class ErrorState(BaseModel):
    """The last request failed."""

    status: Literal["error"] = "error"
    message: str


class GeneratedState(BaseModel):
    """Grid of generated variants."""

    status: Literal["generated"] = "generated"
    brand_name: str
    logos: list[str] = Field(..., min_length=1)


class EnhancedState(BaseModel):
    """Original and enhanced image side by side."""

    status: Literal["enhanced"] = "enhanced"
    original: str
    enhanced: str


StudioState = Annotated[
    IdleState | BusyState | ErrorState | GeneratedState | EnhancedState,
    Field(discriminator="status"),
]


class StudioInputs(BaseModel):
    """What the user typed, picked or uploaded."""

    mode: StudioMode = "generate"
    brand_name: str = ""
    prompt: str = ""
    uploaded_image: str | None = None
