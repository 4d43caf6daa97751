"""Studio logic: sessions, downloads and local image handling."""

from .downloads import brand_slug, download_filename, download_payload
from .images import UploadRejectedError, ensure_png, validate_upload
from .studio import DownloadNotAvailableError, StudioSession, StudioStateError

__all__ = [
    "StudioSession",
    "StudioStateError",
    "DownloadNotAvailableError",
    "UploadRejectedError",
    "brand_slug",
    "download_filename",
    "download_payload",
    "ensure_png",
    "validate_upload",
]
