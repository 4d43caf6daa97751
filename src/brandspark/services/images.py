"""Image checks and conversions done locally with Pillow."""

import io
import logging

from PIL import Image, UnidentifiedImageError

from ..agents.base import decode_data_url

logger = logging.getLogger(__name__)


class UploadRejectedError(ValueError):
    """The uploaded file is not an image we can send for editing."""

    def __init__(self, message: str, too_large: bool = False):
        super().__init__(message)
        self.too_large = too_large


def validate_upload(data_url: str, max_bytes: int) -> tuple[str, int, int]:
    """
    Check an uploaded image data URL before it is kept in a session.

    Returns:
        (media_type, width, height)

    Raises:
        UploadRejectedError: not an image, too large, or unreadable.
        DataUrlFormatError: the data URL itself is malformed.
    """
    media_type, data = decode_data_url(data_url)

    if not media_type.startswith("image/"):
        raise UploadRejectedError(f"Unsupported file type: {media_type}. Please upload an image.")

    if len(data) > max_bytes:
        raise UploadRejectedError(
            f"Image is too large ({len(data) // 1024} KB). "
            f"Maximum is {max_bytes // (1024 * 1024)} MB.",
            too_large=True,
        )

    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
            width, height = img.size
    except Image.DecompressionBombError as e:
        raise UploadRejectedError(
            "Image dimensions are too large. Please upload a smaller image.", too_large=True
        ) from e
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise UploadRejectedError("The uploaded file could not be read as an image.") from e

    logger.debug(f"Accepted upload {media_type} {width}x{height}")
    return media_type, width, height


def ensure_png(data: bytes, media_type: str) -> bytes:
    """Return PNG bytes, converting other formats so downloads match their .png name."""
    if media_type == "image/png":
        return data

    with Image.open(io.BytesIO(data)) as img:
        if img.mode not in ("RGB", "RGBA"):
            img = img.convert("RGBA")
        buffer = io.BytesIO()
        img.save(buffer, "PNG")
    return buffer.getvalue()
