"""Decoding of images into RGBA pixel data."""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Mapping, Optional

from PIL import Image as _PILImage

from goldfish.file import open_file


class ImageDecodeError(ValueError):
    """Image data could not be decoded."""


@dataclass(frozen=True)
class Image:
    """A decoded image: ``width * height`` RGBA pixels, row by row."""

    width: int
    height: int
    pixels: bytes


def decode_image(data: bytes) -> Image:
    """Decode raster image data into 8-bit RGBA pixels."""
    try:
        with _PILImage.open(io.BytesIO(bytes(data))) as source:
            rgba = source.convert("RGBA")
    except OSError as exc:
        raise ImageDecodeError("cannot decode image data") from exc
    return Image(rgba.width, rgba.height, rgba.tobytes())


def load_image(path: str, resources: Optional[Mapping[str, bytes]] = None) -> Image:
    """Load and decode an image from a file or a ``base:/`` resource."""
    with open_file(path, "r", resources) as handle:
        data = handle.read()
    return decode_image(data)