"""Tests for vision image preparation."""

import base64
import io

import pytest
from PIL import Image

from quick_calories.errors import ImageEncodingError
from quick_calories.services.images import (
    JpegImageEncoder,
    estimate_token_cost,
    fit_within,
)

_PREFIX = "data:image/jpeg;base64,"


def _image_bytes(size: tuple[int, int], mode: str = "RGB", fmt: str = "PNG") -> bytes:
    buffer = io.BytesIO()
    Image.new(mode, size).save(buffer, format=fmt)
    return buffer.getvalue()


def _decode(data_url: str) -> Image.Image:
    assert data_url.startswith(_PREFIX)
    return Image.open(io.BytesIO(base64.b64decode(data_url[len(_PREFIX) :])))


def test_fit_within_keeps_small_images() -> None:
    assert fit_within(800, 600, 1024) == (800, 600)
    assert fit_within(1024, 1024, 1024) == (1024, 1024)


def test_fit_within_landscape_and_portrait() -> None:
    assert fit_within(4032, 3024, 1024) == (1024, 768)
    assert fit_within(3024, 4032, 1024) == (768, 1024)
    assert fit_within(3000, 3000, 1024) == (1024, 1024)


def test_encoder_resizes_and_outputs_jpeg() -> None:
    data_url = JpegImageEncoder().encode(_image_bytes((2048, 1024)))

    image = _decode(data_url)
    assert image.format == "JPEG"
    assert image.size == (1024, 512)


def test_encoder_leaves_small_images_unscaled() -> None:
    image = _decode(JpegImageEncoder().encode(_image_bytes((300, 200))))

    assert image.size == (300, 200)


def test_encoder_flattens_transparency() -> None:
    image = _decode(JpegImageEncoder().encode(_image_bytes((64, 64), mode="RGBA")))

    assert image.mode == "RGB"


def test_encoder_rejects_non_images() -> None:
    with pytest.raises(ImageEncodingError):
        JpegImageEncoder().encode(b"definitely not an image")


def test_estimate_token_cost() -> None:
    assert estimate_token_cost(1024, 768) == 1048


def test_encoder_rejects_oversized_images(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)

    with pytest.raises(ImageEncodingError):
        JpegImageEncoder().encode(_image_bytes((100, 100), mode="1"))
