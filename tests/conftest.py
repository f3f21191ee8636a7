import io

import pytest
from PIL import Image

from asciifier.loader import PixelBuffer


def solid(width, height, rgba):
    """PixelBuffer filled with one RGBA (or RGB) value."""
    return PixelBuffer.from_pixels(width, height, [tuple(rgba)] * (width * height))


def horizontal_gradient(width, height):
    """Black on the left to white on the right."""
    pixels = []
    for _ in range(height):
        for x in range(width):
            v = round(255 * x / max(1, width - 1))
            pixels.append((v, v, v, 255))
    return PixelBuffer.from_pixels(width, height, pixels)


def png_bytes(img: Image.Image) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def white_2x2():
    return solid(2, 2, (255, 255, 255, 255))


@pytest.fixture
def red_1x1():
    return solid(1, 1, (255, 0, 0, 255))


@pytest.fixture
def photo():
    """A small RGB image with varied colors and brightness."""
    img = Image.new("RGB", (64, 48))
    px = img.load()
    for y in range(48):
        for x in range(64):
            px[x, y] = ((x * 4) % 256, (y * 5) % 256, ((x + y) * 3) % 256)
    return img
