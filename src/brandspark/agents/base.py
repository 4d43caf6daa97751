"""Base class for logo agents plus data URL helpers."""

import base64
import binascii
import re
from abc import ABC, abstractmethod
from pathlib import Path

# Header of a data URL: "data:image/png;base64"
MIME_TYPE_PATTERN = re.compile(r":(.*?);")

UNKNOWN_GENERATION_ERROR = "An unknown error occurred during logo generation."
UNKNOWN_ENHANCEMENT_ERROR = "An unknown error occurred during logo enhancement."
NO_IMAGES_MESSAGE = (
    "The model did not return any images. This could be due to a safety policy "
    "violation or an issue with the prompt."
)
NO_EDITED_IMAGE_MESSAGE = (
    "The model did not return an image. It might have responded with text instead "
    "or refused the request due to safety policies."
)


class LogoServiceError(Exception):
    """A remote image call failed; the message is safe to show to the user."""


class DataUrlFormatError(LogoServiceError, ValueError):
    """The data URL could not be split into a media type and a payload."""


class NoImageReturnedError(LogoServiceError):
    """The service answered without any usable image."""


class ProviderNotConfiguredError(LogoServiceError, ValueError):
    """The selected provider has no API key or is unknown."""


class BaseLogoAgent(ABC):
    """Common interface for the services that draw and edit logos.

    The API key is passed in explicitly; agents never read the environment.
    """

    provider: str = ""

    def __init__(self, api_key: str):
        if not api_key:
            raise ProviderNotConfiguredError(f"API key for '{self.provider}' is not configured")
        self.api_key = api_key

    @property
    @abstractmethod
    def name(self) -> str:
        """Agent name."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Agent description."""
        pass

    @abstractmethod
    async def generate_logos(self, brand_name: str, prompt: str = "") -> list[str]:
        """Return the generated variants as data URLs, in service order."""
        pass

    @abstractmethod
    async def enhance_logo(self, image_data_url: str, prompt: str) -> str:
        """Return the edited image as a data URL."""
        pass


def parse_data_url(data_url: str) -> tuple[str, str]:
    """
    Split a data URL into (media_type, base64_payload).

    Format: data:image/png;base64,XXXX

    Raises:
        DataUrlFormatError: if the URL has no single comma separator or
            no media type in its header.
    """
    parts = data_url.split(",")
    if len(parts) != 2:
        raise DataUrlFormatError("Invalid data URL format")

    meta, payload = parts
    match = MIME_TYPE_PATTERN.search(meta)
    if not match:
        raise DataUrlFormatError("Could not extract MIME type from data URL")

    return match.group(1), payload


def decode_data_url(data_url: str) -> tuple[str, bytes]:
    """Parse a data URL and decode its payload to raw bytes."""
    media_type, payload = parse_data_url(data_url)
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DataUrlFormatError("Invalid data URL format") from e
    return media_type, data


def to_data_url(data: bytes | str, media_type: str = "image/png") -> str:
    """Encode image bytes (or an already base64 string) as a data URL."""
    if isinstance(data, bytes):
        data = base64.b64encode(data).decode("utf-8")
    return f"data:{media_type};base64,{data}"


def get_image_media_type(image_path: Path) -> str:
    """Guess the media type of an image from its extension."""
    suffix = image_path.suffix.lower()
    media_types = {
        ".jpg": "image/jpeg",
        ".jpeg": "image/jpeg",
        ".png": "image/png",
        ".gif": "image/gif",
        ".webp": "image/webp",
    }
    return media_types.get(suffix, "image/png")


def load_image_as_data_url(image_path: Path) -> str:
    """Read an image file into a data URL."""
    with open(image_path, "rb") as f:
        return to_data_url(f.read(), get_image_media_type(image_path))
