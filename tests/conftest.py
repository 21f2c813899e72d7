import asyncio
import base64
import io
import struct
import time
import zlib

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from main import app
from config.settings import Settings, get_settings
from models import ImageAnalysis
from stores.llm.LLMInterface import LLMInterface
from stores.llm.templates.template_parser import TemplateParser


def make_image_bytes(size=(108, 192), fmt="PNG"):
    buffer = io.BytesIO()
    Image.new("RGB", size, (200, 120, 80)).save(buffer, format=fmt)
    return buffer.getvalue()


def make_data_uri(size=(108, 192), fmt="PNG", mime="image/png"):
    encoded = base64.b64encode(make_image_bytes(size, fmt)).decode("utf-8")
    return f"data:{mime};base64,{encoded}"


def png_chunk(kind: bytes, data: bytes) -> bytes:
    return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", zlib.crc32(kind + data))


def make_oversized_png(width=20000, height=10000):
    """A PNG whose header declares a huge 1-bit image; only the header is ever read."""
    header = struct.pack(">IIBBBBB", width, height, 1, 0, 0, 0, 0)
    return (b"\x89PNG\r\n\x1a\n" + png_chunk(b"IHDR", header)
            + png_chunk(b"IDAT", zlib.compress(b"")) + png_chunk(b"IEND", b""))


SAMPLE_ANALYSIS = ImageAnalysis(
    type="Photo",
    style="Studio Photography",
    lighting="Golden Hour Warm Lighting",
    composition="Close-up shot",
    colors="Color palette featuring: Black, White",
    mood="Peaceful and serene",
    realism="High realism with natural textures",
)


class FakeVisionClient(LLMInterface):

    def __init__(self, analysis=None, prompt="A dreamy portrait of [USER FACE].",
                 error=None, direct=False, delay=0.0):
        self.analysis = analysis or SAMPLE_ANALYSIS
        self.prompt = prompt
        self.error = error
        self.delay = delay
        self.supports_direct_prompt = direct
        self.calls = []

    def set_generation_model(self, model_id: str):
        self.model_id = model_id

    def analyze_image(self, image_bytes, mime_type, prompt=None):
        self.calls.append("analyze")
        if self.delay:
            time.sleep(self.delay)
        if self.error:
            raise self.error
        return self.analysis.model_copy()

    def generate_prompt(self, image_bytes, mime_type, prompt):
        self.calls.append("generate")
        if self.error:
            raise self.error
        return self.prompt


class FakeFactory:

    def __init__(self, client=None, failures=0, error=None):
        self.client = client or FakeVisionClient()
        self.failures = failures
        self.error = error
        self.calls = 0

    def create(self, provider):
        self.calls += 1
        if self.error:
            raise self.error
        if self.calls <= self.failures:
            raise ConnectionError("SDK bootstrap failed")
        return self.client


@pytest.fixture
def template_parser():
    return TemplateParser(language="en")


@pytest.fixture
def make_client(template_parser):
    def _make(vision_client=None, factory=None, **overrides):
        overrides.setdefault("VISION_INIT_RETRY_BASE_DELAY", 0)
        settings = Settings(**overrides)
        app.dependency_overrides[get_settings] = lambda: settings
        app.vision_client = vision_client
        app.vision_client_lock = asyncio.Lock()
        app.vision_factory = factory or FakeFactory()
        app.template_parser = template_parser
        return TestClient(app)

    yield _make

    app.dependency_overrides.clear()
    app.vision_client = None
