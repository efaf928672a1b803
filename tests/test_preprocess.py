"""TDD: ImagePreprocessor tests written FIRST"""
import base64
import io

import pytest
from PIL import Image

from nutrition_decoder.errors import DecodeError
from nutrition_decoder.models import SourceImage
from nutrition_decoder.preprocess import ImagePreprocessor, target_size


def decoded(encoded) -> Image.Image:
    return Image.open(io.BytesIO(base64.standard_b64decode(encoded.data)))


# ── target_size ───────────────────────────────────────────────────────────────


def test_target_size_portrait_keeps_aspect():
    assert target_size(2000, 3000) == (683, 1024)


def test_target_size_landscape_keeps_aspect():
    assert target_size(4032, 3024) == (1024, 768)


def test_target_size_small_image_is_not_upscaled():
    assert target_size(640, 480) == (640, 480)


def test_target_size_exact_bound_unchanged():
    assert target_size(1024, 1024) == (1024, 1024)


def test_target_size_never_collapses_to_zero():
    assert target_size(10000, 2) == (1024, 1)


# ── prepare ───────────────────────────────────────────────────────────────────


async def test_prepare_downscales_large_image(make_png):
    source = SourceImage(data=make_png((2000, 3000)), media_type="image/png")

    encoded = await ImagePreprocessor().prepare(source)

    img = decoded(encoded)
    assert img.size == (683, 1024)
    assert img.format == "JPEG"


async def test_prepare_output_is_jpeg_regardless_of_input_type(make_png):
    source = SourceImage(data=make_png((300, 200), mode="RGBA"), media_type="image/png")

    encoded = await ImagePreprocessor().prepare(source)

    assert encoded.media_type == "image/jpeg"
    assert decoded(encoded).mode == "RGB"


async def test_prepare_keeps_small_image_size(make_png):
    source = SourceImage(data=make_png((320, 240)), media_type="image/png")

    encoded = await ImagePreprocessor().prepare(source)

    assert decoded(encoded).size == (320, 240)


async def test_prepare_respects_custom_bound(make_png):
    source = SourceImage(data=make_png((800, 400)), media_type="image/png")

    encoded = await ImagePreprocessor(max_edge=200).prepare(source)

    assert decoded(encoded).size == (200, 100)


async def test_prepare_rejects_garbage():
    source = SourceImage(data=b"definitely not an image", media_type="image/jpeg")

    with pytest.raises(DecodeError):
        await ImagePreprocessor().prepare(source)


async def test_prepare_rejects_empty_bytes():
    with pytest.raises(DecodeError):
        await ImagePreprocessor().prepare(SourceImage(data=b"", media_type="image/jpeg"))


# ── prepare_batch ─────────────────────────────────────────────────────────────


async def test_prepare_batch_preserves_order(make_png):
    sources = [
        SourceImage(data=make_png((100, 50)), media_type="image/png"),
        SourceImage(data=make_png((60, 90)), media_type="image/png"),
    ]

    encoded = await ImagePreprocessor().prepare_batch(sources)

    assert [decoded(e).size for e in encoded] == [(100, 50), (60, 90)]


async def test_prepare_batch_fails_whole_batch_on_one_bad_image(make_png):
    sources = [
        SourceImage(data=make_png((100, 50)), media_type="image/png"),
        SourceImage(data=b"broken", media_type="image/jpeg"),
    ]

    with pytest.raises(DecodeError):
        await ImagePreprocessor().prepare_batch(sources)


async def test_prepare_batch_empty_returns_empty():
    assert await ImagePreprocessor().prepare_batch([]) == []
