"""API schemas for request/response models."""

from pydantic import BaseModel, Field, field_validator

from ..models.logo import LogoVariant
from ..models.studio import StudioMode, StudioState

# =============================================================================
# Logo Schemas
# =============================================================================


class GenerateLogosRequest(BaseModel):
    """Request to generate logo variants."""

    brand_name: str = Field(..., description="Brand name, must not be blank")
    prompt: str = Field(default="", description="Optional style description")

    @field_validator("brand_name")
    @classmethod
    def brand_name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Please provide a brand name.")
        return value


class GenerateLogosResponse(BaseModel):
    """Generated variants, each with its download filename."""

    brand_name: str
    logos: list[LogoVariant]


class EnhanceLogoRequest(BaseModel):
    """Request to edit an existing image."""

    image: str = Field(..., min_length=1, description="Image as a data URL")
    prompt: str = Field(..., description="Description of the changes")

    @field_validator("prompt")
    @classmethod
    def prompt_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Please provide a description of the changes you want.")
        return value


class EnhanceLogoResponse(BaseModel):
    """Original and enhanced image."""

    original: str
    enhanced: str
    filename: str


# =============================================================================
# Studio Schemas
# =============================================================================


class StudioInputUpdate(BaseModel):
    """Edits from the input screen. Omitted fields stay as they are."""

    mode: StudioMode | None = None
    brand_name: str | None = None
    prompt: str | None = None
    uploaded_image: str | None = None  # data URL
    clear_image: bool = False


class StudioSnapshot(BaseModel):
    """Everything the page needs to render a session."""

    session_id: str
    mode: StudioMode
    brand_name: str
    prompt: str
    uploaded_image: str | None = None
    validation_message: str | None = None
    state: StudioState
    downloads: list[str] = Field(default_factory=list)  # filenames, in display order
