"""Studio session: the input screen, the busy flag and the result display.

A session holds what the user typed or uploaded plus one ``StudioState``.
``generate`` and ``enhance`` validate the inputs, switch to ``BusyState``
before awaiting the agent, and land in a result or error state. While busy,
both are no-ops, so a double submit never reaches the remote service twice.
"""

import logging
import uuid

from ..agents.base import NO_IMAGES_MESSAGE, BaseLogoAgent
from ..models.studio import (
    BusyState,
    EnhancedState,
    ErrorState,
    GeneratedState,
    IdleState,
    StudioInputs,
    StudioMode,
    StudioState,
)
from .downloads import download_filename, download_payload
from .images import validate_upload

logger = logging.getLogger(__name__)

MISSING_BRAND_NAME = "Please provide a brand name."
MISSING_IMAGE = "Please upload an image."
MISSING_DESCRIPTION = "Please provide a description of the changes you want."
UNKNOWN_ERROR = "An unknown error occurred."

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


class StudioStateError(Exception):
    """The operation is not allowed in the current state."""


class DownloadNotAvailableError(LookupError):
    """There is no image at the requested position."""


class StudioSession:
    """One user's studio."""

    def __init__(
        self,
        agent: BaseLogoAgent,
        session_id: str | None = None,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
    ):
        self.id = session_id or uuid.uuid4().hex
        self.agent = agent
        self.max_upload_bytes = max_upload_bytes
        self.inputs = StudioInputs()
        self.state: StudioState = IdleState()
        self.validation_message: str | None = None

    @property
    def is_busy(self) -> bool:
        return isinstance(self.state, BusyState)

    # ------------------------------------------------------------------
    # Input screen
    # ------------------------------------------------------------------

    def update_inputs(
        self,
        mode: StudioMode | None = None,
        brand_name: str | None = None,
        prompt: str | None = None,
        uploaded_image: str | None = None,
        clear_image: bool = False,
    ) -> None:
        """
        Apply edits from the input screen.

        Switching mode resets every input first. Only allowed while idle.

        Raises:
            StudioStateError: the session is busy or showing a result/error.
            UploadRejectedError: the uploaded image failed validation.
        """
        if not isinstance(self.state, IdleState):
            raise StudioStateError(f"Inputs cannot change while {self.state.status}")

        if uploaded_image is not None:
            validate_upload(uploaded_image, self.max_upload_bytes)

        if mode is not None and mode != self.inputs.mode:
            self.inputs = StudioInputs(mode=mode)
        if brand_name is not None:
            self.inputs.brand_name = brand_name
        if prompt is not None:
            self.inputs.prompt = prompt
        if clear_image:
            self.inputs.uploaded_image = None
        if uploaded_image is not None:
            self.inputs.uploaded_image = uploaded_image

        self.validation_message = None

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    async def generate(self) -> StudioState:
        """Generate logo variants for the current brand name and prompt."""
        if self.is_busy:
            logger.debug(f"Session {self.id}: generate ignored, request in flight")
            return self.state

        if not self.inputs.brand_name.strip():
            self.validation_message = MISSING_BRAND_NAME
            return self.state

        brand_name = self.inputs.brand_name
        self.validation_message = None
        self.state = BusyState(mode="generate")

        try:
            logos = await self.agent.generate_logos(brand_name, self.inputs.prompt)
        except Exception as e:
            logger.error(f"Session {self.id}: generation failed: {e}")
            self.state = ErrorState(message=f"Failed to generate logos. {str(e) or UNKNOWN_ERROR}")
        else:
            if logos:
                self.state = GeneratedState(brand_name=brand_name, logos=logos)
            else:
                self.state = ErrorState(message=f"Failed to generate logos. {NO_IMAGES_MESSAGE}")
        finally:
            # Cancelled or interrupted: never leave the session stuck in busy
            if self.is_busy:
                logger.warning(f"Session {self.id}: generation interrupted")
                self.state = ErrorState(message=f"Failed to generate logos. {UNKNOWN_ERROR}")

        return self.state

    async def enhance(self) -> StudioState:
        """Send the uploaded image and the change description for editing."""
        if self.is_busy:
            logger.debug(f"Session {self.id}: enhance ignored, request in flight")
            return self.state

        original = self.inputs.uploaded_image
        if not original:
            self.validation_message = MISSING_IMAGE
            return self.state
        if not self.inputs.prompt.strip():
            self.validation_message = MISSING_DESCRIPTION
            return self.state

        self.validation_message = None
        self.state = BusyState(mode="enhance")

        try:
            enhanced = await self.agent.enhance_logo(original, self.inputs.prompt)
        except Exception as e:
            logger.error(f"Session {self.id}: enhancement failed: {e}")
            self.state = ErrorState(message=f"Failed to enhance logo. {str(e) or UNKNOWN_ERROR}")
        else:
            self.state = EnhancedState(original=original, enhanced=enhanced)
        finally:
            if self.is_busy:
                logger.warning(f"Session {self.id}: enhancement interrupted")
                self.state = ErrorState(message=f"Failed to enhance logo. {UNKNOWN_ERROR}")

        return self.state

    def start_over(self) -> StudioState:
        """Clear inputs, results and errors and go back to the input screen."""
        if self.is_busy:
            logger.debug(f"Session {self.id}: start over ignored, request in flight")
            return self.state

        self.inputs = StudioInputs()
        self.validation_message = None
        self.state = IdleState()
        return self.state

    # ------------------------------------------------------------------
    # Downloads
    # ------------------------------------------------------------------

    def result_images(self) -> list[str]:
        """Downloadable images of the current result, in display order."""
        if isinstance(self.state, GeneratedState):
            return list(self.state.logos)
        if isinstance(self.state, EnhancedState):
            return [self.state.enhanced]
        return []

    def download(self, index: int) -> tuple[str, bytes]:
        """
        Return (filename, png_bytes) for the index-th (1-based) result image.

        Raises:
            DownloadNotAvailableError: no result, or index out of range.
        """
        images = self.result_images()
        if not 1 <= index <= len(images):
            raise DownloadNotAvailableError(f"No image {index} to download")

        brand_name = self.state.brand_name if isinstance(self.state, GeneratedState) else ""
        return download_filename(brand_name, index), download_payload(images[index - 1])
