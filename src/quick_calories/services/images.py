"""Image preparation for vision requests."""

import base64
import io
import logging
from dataclasses import dataclass
from typing import Protocol

from PIL import Image, UnidentifiedImageError

from quick_calories.errors import ImageEncodingError

MAX_DIMENSION = 1024
JPEG_QUALITY = 80
PIXELS_PER_TOKEN = 750

_logger = logging.getLogger(__name__)


class ImageEncoder(Protocol):
    """Interface for turning raw photo bytes into an image data URL."""

    def encode(self, image_bytes: bytes) -> str:
        """Return a ``data:`` URL for the image."""


@dataclass
class JpegImageEncoder(ImageEncoder):
    """Pillow-backed encoder: fit within bounds, JPEG, base64."""

    max_dimension: int = MAX_DIMENSION
    quality: int = JPEG_QUALITY

    def encode(self, image_bytes: bytes) -> str:
        """Resize, JPEG-compress and wrap the image in a data URL."""
        output = io.BytesIO()
        try:
            with Image.open(io.BytesIO(image_bytes)) as image:
                prepared = _to_rgb(resize_to_fit(image, self.max_dimension))
                prepared.save(output, format="JPEG", quality=self.quality)
                size = prepared.size
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
            raise ImageEncodingError from exc

        jpeg = output.getvalue()
        _logger.info(
            "Encoded image for vision: size=%sx%s bytes=%s tokens~%s",
            size[0],
            size[1],
            len(jpeg),
            estimate_token_cost(*size),
        )
        return to_data_url(jpeg)


def fit_within(width: int, height: int, max_dimension: int) -> tuple[int, int]:
    """Return the size scaled so neither side exceeds ``max_dimension``."""
    if width <= max_dimension and height <= max_dimension:
        return width, height
    aspect_ratio = width / height
    if width > height:
        new_width, new_height = max_dimension, max_dimension / aspect_ratio
    else:
        new_width, new_height = max_dimension * aspect_ratio, max_dimension
    return max(1, round(new_width)), max(1, round(new_height))


def resize_to_fit(image: Image.Image, max_dimension: int) -> Image.Image:
    """Resize preserving aspect ratio; images already in bounds are returned as is."""
    size = fit_within(image.width, image.height, max_dimension)
    if size == image.size:
        return image
    return image.resize(size, Image.Resampling.LANCZOS)


def to_data_url(jpeg_bytes: bytes) -> str:
    encoded = base64.b64encode(jpeg_bytes).decode("utf-8")
    return f"data:image/jpeg;base64,{encoded}"


def estimate_token_cost(width: int, height: int) -> int:
    """Approximate vision token cost for an image of the given size."""
    return int(width * height / PIXELS_PER_TOKEN)


def _to_rgb(image: Image.Image) -> Image.Image:
    """Flatten transparency onto white; JPEG has no alpha channel."""
    if image.mode in ("RGBA", "LA", "P"):
        if image.mode == "P":
            image = image.convert("RGBA")
        background = Image.new("RGB", image.size, (255, 255, 255))
        background.paste(image, mask=image.split()[-1])
        return background
    if image.mode != "RGB":
        return image.convert("RGB")
    return image
