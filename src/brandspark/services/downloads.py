"""Download filenames and payloads."""

import re

from ..agents.base import decode_data_url
from .images import ensure_png

WHITESPACE_RUN = re.compile(r"\s+")


def brand_slug(brand_name: str) -> str:
    """Lower-case the brand name and replace each whitespace run with one hyphen."""
    if not brand_name:
        return "logo"
    return WHITESPACE_RUN.sub("-", brand_name.lower())


def download_filename(brand_name: str, index: int) -> str:
    """Filename for the index-th (1-based) image of a result set."""
    return f"brandspark-{brand_slug(brand_name)}-{index}.png"


def download_payload(data_url: str) -> bytes:
    """PNG bytes for a rendered image."""
    media_type, data = decode_data_url(data_url)
    return ensure_png(data, media_type)
