"""API configuration using Pydantic Settings."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """API configuration loaded from environment."""

    PROJECT_NAME: str = "BrandSpark API"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Security
    ACCESS_KEY: str = ""  # If set, requires X-API-Key header on /api/v1
    CORS_ORIGINS: list[str] = [
        "http://localhost:8000",
        "http://127.0.0.1:8000",
    ]
    RATE_LIMIT_PER_MINUTE: int = 120

    # Image provider: "gemini" or "openai"
    IMAGE_PROVIDER: str = "gemini"

    # AI API Keys (loaded from .env)
    GEMINI_API_KEY: str = Field(
        default="", validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY")
    )
    OPENAI_API_KEY: str = ""

    # Models
    GEMINI_IMAGE_MODEL: str = "imagen-4.0-generate-001"
    GEMINI_EDIT_MODEL: str = "gemini-2.5-flash-image-preview"
    OPENAI_IMAGE_MODEL: str = "gpt-image-1"

    # Studio limits
    MAX_UPLOAD_MB: int = Field(default=10, ge=0)
    MAX_SESSIONS: int = Field(default=500, ge=1)

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.ENVIRONMENT == "production"

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins, stricter in production."""
        if self.is_production and not self.CORS_ORIGINS:
            return []
        return self.CORS_ORIGINS

    @property
    def max_upload_bytes(self) -> int:
        return self.MAX_UPLOAD_MB * 1024 * 1024

    @property
    def provider_api_key(self) -> str:
        """API key of the selected image provider."""
        if self.IMAGE_PROVIDER == "openai":
            return self.OPENAI_API_KEY
        return self.GEMINI_API_KEY

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )


settings = Settings()
