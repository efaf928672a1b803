import base64
import io
import json

import pytest
from PIL import Image

from nutrition_decoder.models import EncodedImage, SourceImage
from nutrition_decoder.vision.client import AnalysisBackend

SAMPLE_RESULT = {
    "productName": "Choco Milk",
    "verdict": {"title": "Basically dessert in a carton", "color": "red"},
    "highlights": [
        {"type": "bad", "label": "Sugar", "value": "24g", "desc": "About 6 sugar cubes"},
        {"type": "good", "label": "Protein", "value": "8g", "desc": "Like one egg"},
    ],
    "translations": [
        {"origin": "Carrageenan", "simplified": "Seaweed thickener", "explain": "Keeps it smooth"},
    ],
    "advice": {"target": "Active teens", "warning": "Diabetics", "action": "Half a carton, tops"},
}


class FakeBackend(AnalysisBackend):
    name = "fake"
    default_model = "fake-model"
    instruction = "decode this label"

    def __init__(self, reply: str = "", api_key: str | None = "test-key", **kwargs) -> None:
        super().__init__(api_key, **kwargs)
        self.reply = reply
        self.requests = []

    async def _generate(self, request):
        self.requests.append(request)
        return self.reply


def png_bytes(size: tuple[int, int], mode: str = "RGB") -> bytes:
    buffer = io.BytesIO()
    Image.new(mode, size, "white").save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def sample_json() -> str:
    return json.dumps(SAMPLE_RESULT)


@pytest.fixture
def make_backend():
    return FakeBackend


@pytest.fixture
def encoded_image() -> EncodedImage:
    return EncodedImage(data=base64.standard_b64encode(b"fake-jpeg").decode(), media_type="image/jpeg")


@pytest.fixture
def source_image() -> SourceImage:
    return SourceImage(data=png_bytes((400, 300)), media_type="image/png")


@pytest.fixture
def make_png():
    return png_bytes
