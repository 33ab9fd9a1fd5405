import base64
from io import BytesIO

import pytest
from PIL import Image

from creative_gen.models import ImageGenerationRequest, OutputFormat, ReferenceImage, VideoGenerationRequest


class SleepRecorder:
    """Stand-in for asyncio.sleep that records delays instead of waiting."""

    def __init__(self):
        self.delays = []

    async def __call__(self, seconds):
        self.delays.append(seconds)


def png_bytes(color=(200, 30, 30), size=(8, 8)) -> bytes:
    buf = BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()


def png_data_url(color=(200, 30, 30)) -> str:
    return "data:image/png;base64," + base64.b64encode(png_bytes(color)).decode("ascii")


@pytest.fixture
def sleep():
    return SleepRecorder()


@pytest.fixture
def image_request():
    return ImageGenerationRequest(
        brand_id="brand_123",
        prompt="Test product photography",
        output_formats=[OutputFormat(name="square", width=1080, height=1080)],
    )


@pytest.fixture
def video_request():
    return VideoGenerationRequest(
        brand_id="brand_123",
        prompt="Product demo video",
        duration=15,
        aspect_ratio="16:9",
    )


@pytest.fixture
def six_talent_refs():
    return [
        ReferenceImage(url=png_data_url((i * 40, 10, 10)), type="talent", description=f"model {i}")
        for i in range(6)
    ]
