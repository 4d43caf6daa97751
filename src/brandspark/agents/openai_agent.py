"""OpenAI Agent - draws and edits logos with GPT-Image (Images API)."""

import logging

import httpx
from openai import AsyncOpenAI

from ..models.logo import NUM_VARIANTS, LogoPrompt
from .base import (
    NO_EDITED_IMAGE_MESSAGE,
    NO_IMAGES_MESSAGE,
    UNKNOWN_ENHANCEMENT_ERROR,
    UNKNOWN_GENERATION_ERROR,
    BaseLogoAgent,
    LogoServiceError,
    NoImageReturnedError,
    decode_data_url,
    to_data_url,
)

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_MODEL = "gpt-image-1"

# Square output for every supported model
IMAGE_SIZE = "1024x1024"

# Extensions the Images API uses to sniff uploaded files
UPLOAD_EXTENSIONS = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/webp": "webp",
}


class OpenAILogoAgent(BaseLogoAgent):
    """Agent backed by the OpenAI Images API."""

    provider = "openai"

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_IMAGE_MODEL,
        client: AsyncOpenAI | None = None,
    ):
        super().__init__(api_key)
        if not model.startswith("gpt-image"):
            raise NotImplementedError(f"Model {model} not supported")
        self.client = client or AsyncOpenAI(api_key=api_key)
        self.model = model

    @property
    def name(self) -> str:
        return "OpenAI"

    @property
    def description(self) -> str:
        return f"Generates and edits with {self.model}"

    async def generate_logos(self, brand_name: str, prompt: str = "") -> list[str]:
        logo_prompt = LogoPrompt(brand_name=brand_name.strip(), style=prompt)

        logger.info(f"Sending prompt to {self.model}.")
        try:
            result = await self.client.images.generate(
                model=self.model,
                prompt=logo_prompt.get_full_prompt(),
                n=NUM_VARIANTS,
                size=IMAGE_SIZE,
            )
            logos = [await self._to_data_url(image) for image in result.data or []]
        except Exception as e:
            logger.error(f"Logo generation error: {e}", exc_info=True)
            raise LogoServiceError(str(e) or UNKNOWN_GENERATION_ERROR) from e

        logos = [logo for logo in logos if logo]
        if not logos:
            raise NoImageReturnedError(NO_IMAGES_MESSAGE)

        logger.info(f"Received {len(logos)} generated logos.")
        return logos

    async def enhance_logo(self, image_data_url: str, prompt: str) -> str:
        mime_type, data = decode_data_url(image_data_url)
        filename = f"logo.{UPLOAD_EXTENSIONS.get(mime_type, 'png')}"

        logger.info(f"Sending edit request to {self.model}.")
        try:
            result = await self.client.images.edit(
                model=self.model,
                image=(filename, data, mime_type),
                prompt=prompt,
                size=IMAGE_SIZE,
            )
            edited = [await self._to_data_url(image) for image in result.data or []]
        except Exception as e:
            logger.error(f"Logo enhancement error: {e}", exc_info=True)
            raise LogoServiceError(str(e) or UNKNOWN_ENHANCEMENT_ERROR) from e

        edited = [image for image in edited if image]
        if not edited:
            raise NoImageReturnedError(NO_EDITED_IMAGE_MESSAGE)

        logger.info("Received enhanced logo.")
        return edited[0]

    async def _to_data_url(self, image) -> str | None:
        """Convert one Images API entry to a data URL, downloading it if only a URL came back."""
        if image.b64_json:
            return to_data_url(image.b64_json, "image/png")
        if image.url:
            async with httpx.AsyncClient() as http:
                response = await http.get(image.url)
                response.raise_for_status()
            media_type = response.headers.get("content-type", "image/png").split(";")[0]
            return to_data_url(response.content, media_type)
        return None
