"""Decode image sources into immutable RGBA pixel buffers."""

import io
import logging
import os
from dataclasses import dataclass
from typing import BinaryIO, Iterator, Sequence, Tuple, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from .errors import DecodeError

LOG = logging.getLogger(__name__)

# The upload form rejects anything larger than this.
MAX_IMAGE_BYTES = 10 * 1024 * 1024

RGBA = Tuple[int, int, int, int]
ImageSource = Union[bytes, bytearray, str, "os.PathLike[str]", BinaryIO, Image.Image]


@dataclass(frozen=True)
class PixelBuffer:
    """Row-major RGBA pixels; ``rgba`` has shape (height, width, 4), uint8, read-only."""

    width: int
    height: int
    rgba: np.ndarray

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise DecodeError(f"Empty image ({self.width}x{self.height})")
        if self.rgba.shape != (self.height, self.width, 4):
            raise DecodeError(
                f"Pixel data shape {self.rgba.shape} does not match {self.width}x{self.height}"
            )
        if self.rgba.flags.writeable or self.rgba.dtype != np.uint8:
            arr = np.array(self.rgba, dtype=np.uint8, copy=True)
            arr.flags.writeable = False
            object.__setattr__(self, "rgba", arr)

    @classmethod
    def from_pixels(cls, width: int, height: int, pixels: Sequence[Sequence[int]]) -> "PixelBuffer":
        """Build a buffer from a flat sequence of RGBA (or RGB) tuples."""
        if width <= 0 or height <= 0:
            raise DecodeError(f"Empty image ({width}x{height})")
        if len(pixels) != width * height:
            raise DecodeError(f"Expected {width * height} pixels, got {len(pixels)}")
        arr = np.zeros((height, width, 4), dtype=np.uint8)
        arr[..., 3] = 255
        if pixels:
            try:
                flat = np.asarray(pixels, dtype=np.int64)
            except (TypeError, ValueError) as exc:
                raise DecodeError(f"Malformed pixel data: {exc}") from exc
            if flat.ndim != 2 or flat.shape[1] not in (3, 4):
                raise DecodeError("Pixels must be RGB or RGBA tuples")
            arr[..., : flat.shape[1]] = np.clip(flat, 0, 255).reshape(height, width, -1)
        return cls(width=width, height=height, rgba=arr)

    @classmethod
    def from_image(cls, img: Image.Image) -> "PixelBuffer":
        rgba = np.asarray(img.convert("RGBA"), dtype=np.uint8)
        return cls(width=img.width, height=img.height, rgba=rgba)

    def pixel(self, x: int, y: int) -> RGBA:
        r, g, b, a = self.rgba[y, x]
        return int(r), int(g), int(b), int(a)

    def pixels(self) -> Iterator[RGBA]:
        for row in self.rgba:
            for r, g, b, a in row:
                yield int(r), int(g), int(b), int(a)

    def __len__(self):
        return self.width * self.height


# -----------------------------
# Decoding
# -----------------------------

def _read_source(source) -> bytes:
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    if isinstance(source, (str, os.PathLike)):
        try:
            size = os.path.getsize(source)
        except OSError as exc:
            raise DecodeError(f"Cannot read image file {source}: {exc}") from exc
        if size > MAX_IMAGE_BYTES:
            raise DecodeError(f"Image file is too large ({size} bytes, max {MAX_IMAGE_BYTES})")
        with open(source, "rb") as f:
            return f.read()
    if hasattr(source, "read"):
        # Read one byte past the ceiling so oversized streams are detected.
        data = source.read(MAX_IMAGE_BYTES + 1)
        if not isinstance(data, (bytes, bytearray)):
            raise DecodeError(f"Image stream must be binary, got {type(data).__name__}")
        return bytes(data)
    raise DecodeError(f"Unsupported image source type: {type(source).__name__}")


def load_image(source: ImageSource) -> PixelBuffer:
    """Decode ``source`` into a PixelBuffer or raise DecodeError."""
    if isinstance(source, Image.Image):
        if source.width <= 0 or source.height <= 0:
            raise DecodeError("Empty image")
        return PixelBuffer.from_image(source)

    data = _read_source(source)
    if len(data) > MAX_IMAGE_BYTES:
        raise DecodeError(f"Image is too large (max {MAX_IMAGE_BYTES} bytes)")
    if not data:
        raise DecodeError("Image source is empty")

    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            LOG.debug("Decoded %s image %dx%d mode=%s", img.format, img.width, img.height, img.mode)
            return PixelBuffer.from_image(img)
    except (UnidentifiedImageError, Image.DecompressionBombError) as exc:
        raise DecodeError(f"Unsupported or corrupt image: {exc}") from exc
    except (OSError, SyntaxError, ValueError) as exc:
        raise DecodeError(f"Failed to decode image: {exc}") from exc
