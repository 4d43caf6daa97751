"""Pytest configuration and fixtures."""

import asyncio
import base64
import io
import os
import sys
from pathlib import Path

import pytest
from PIL import Image

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

# Set test environment
os.environ["ENVIRONMENT"] = "test"

from brandspark.agents.base import BaseLogoAgent, NoImageReturnedError  # noqa: E402


def make_png(color: str = "red", size: tuple[int, int] = (4, 4)) -> bytes:
    """Build a small real PNG."""
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, "PNG")
    return buffer.getvalue()


def make_data_url(data: bytes, media_type: str = "image/png") -> str:
    return f"data:{media_type};base64,{base64.b64encode(data).decode()}"


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def png_data_url(png_bytes: bytes) -> str:
    return make_data_url(png_bytes)


@pytest.fixture
def jpeg_data_url() -> str:
    buffer = io.BytesIO()
    Image.new("RGB", (4, 4), "blue").save(buffer, "JPEG")
    return make_data_url(buffer.getvalue(), "image/jpeg")


class FakeLogoAgent(BaseLogoAgent):
    """Logo agent that records calls instead of reaching a remote service.

    ``gate`` can be set to an asyncio.Event to hold calls in flight.
    """

    provider = "fake"

    def __init__(self, logos: list[str] | None = None, enhanced: str | None = None):
        super().__init__(api_key="test-key")
        if logos is None:
            logos = [make_data_url(make_png(c)) for c in ("red", "green", "blue", "black")]
        self.logos = logos
        self.enhanced = enhanced or make_data_url(make_png("white"))
        self.error: Exception | None = None
        self.gate: asyncio.Event | None = None
        self.calls: list[tuple] = []

    @property
    def name(self) -> str:
        return "Fake"

    @property
    def description(self) -> str:
        return "Records calls"

    async def generate_logos(self, brand_name: str, prompt: str = "") -> list[str]:
        self.calls.append(("generate", brand_name, prompt))
        if self.gate:
            await self.gate.wait()
        if self.error:
            raise self.error
        if not self.logos:
            raise NoImageReturnedError("no images")
        return self.logos

    async def enhance_logo(self, image_data_url: str, prompt: str) -> str:
        self.calls.append(("enhance", image_data_url, prompt))
        if self.gate:
            await self.gate.wait()
        if self.error:
            raise self.error
        return self.enhanced


@pytest.fixture
def fake_agent() -> FakeLogoAgent:
    return FakeLogoAgent()
