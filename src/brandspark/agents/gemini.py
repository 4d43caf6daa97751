"""Gemini Agent - draws logos with Imagen and edits them with Gemini image models."""

import logging

from google import genai
from google.genai import types

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

DEFAULT_IMAGE_MODEL = "imagen-4.0-generate-001"
DEFAULT_EDIT_MODEL = "gemini-2.5-flash-image-preview"


class GeminiLogoAgent(BaseLogoAgent):
    """Agent backed by the Google Gen AI SDK (async client)."""

    provider = "gemini"

    def __init__(
        self,
        api_key: str,
        image_model: str = DEFAULT_IMAGE_MODEL,
        edit_model: str = DEFAULT_EDIT_MODEL,
        client: genai.Client | None = None,
    ):
        super().__init__(api_key)
        self.client = client or genai.Client(api_key=api_key)
        self.image_model = image_model
        self.edit_model = edit_model

    @property
    def name(self) -> str:
        return "Gemini"

    @property
    def description(self) -> str:
        return f"Generates with {self.image_model}, edits with {self.edit_model}"

    async def generate_logos(self, brand_name: str, prompt: str = "") -> list[str]:
        logo_prompt = LogoPrompt(brand_name=brand_name.strip(), style=prompt)

        logger.info("Sending prompt to Gemini image generation model.")
        try:
            response = await self.client.aio.models.generate_images(
                model=self.image_model,
                prompt=logo_prompt.get_full_prompt(),
                config=types.GenerateImagesConfig(
                    number_of_images=NUM_VARIANTS,
                    output_mime_type="image/png",
                    aspect_ratio="1:1",
                ),
            )
        except Exception as e:
            logger.error(f"Logo generation error: {e}", exc_info=True)
            raise LogoServiceError(str(e) or UNKNOWN_GENERATION_ERROR) from e

        # Filtered images come back without bytes
        image_bytes = [
            generated.image.image_bytes
            for generated in response.generated_images or []
            if generated.image and generated.image.image_bytes
        ]
        if not image_bytes:
            raise NoImageReturnedError(NO_IMAGES_MESSAGE)

        logger.info(f"Received {len(image_bytes)} generated logos.")
        return [to_data_url(data, "image/png") for data in image_bytes]

    async def enhance_logo(self, image_data_url: str, prompt: str) -> str:
        mime_type, data = decode_data_url(image_data_url)

        logger.info("Sending prompt to Gemini image editing model.")
        try:
            response = await self.client.aio.models.generate_content(
                model=self.edit_model,
                contents=types.Content(
                    role="user",
                    parts=[
                        types.Part(inline_data=types.Blob(data=data, mime_type=mime_type)),
                        types.Part(text=prompt),
                    ],
                ),
                config=types.GenerateContentConfig(
                    response_modalities=["IMAGE", "TEXT"],
                ),
            )
        except Exception as e:
            logger.error(f"Logo enhancement error: {e}", exc_info=True)
            raise LogoServiceError(str(e) or UNKNOWN_ENHANCEMENT_ERROR) from e

        return extract_image_part(response)


def extract_image_part(response: types.GenerateContentResponse) -> str:
    """
    Return the first inline image of the first candidate as a data URL.

    When there is no image, the first text part (if any) becomes the error
    message.
    """
    parts = []
    if response.candidates and response.candidates[0].content:
        parts = response.candidates[0].content.parts or []

    for part in parts:
        if part.inline_data and part.inline_data.data:
            logger.info("Received enhanced logo.")
            return to_data_url(part.inline_data.data, part.inline_data.mime_type or "image/png")

    text = next((part.text for part in parts if part.text), None)
    raise NoImageReturnedError(text or NO_EDITED_IMAGE_MESSAGE)
