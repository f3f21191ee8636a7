"""Downscale a pixel buffer to one representative color per output cell."""

import logging
import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np
from PIL import Image

from .loader import PixelBuffer

LOG = logging.getLogger(__name__)

# Character cells are roughly twice as tall as they are wide.
CELL_ASPECT = 0.5

# Rec. 601 luma weights
LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float64)

ENHANCE_PERCENTILES = (5.0, 95.0)

# Percentile bounds are taken from a copy reduced to about this many pixels.
ENHANCE_SAMPLE_PIXELS = 512 * 512


@dataclass(frozen=True)
class SampledGrid:
    rgb: np.ndarray  # (rows, cols, 3) float64, 0..255
    luminance: np.ndarray  # (rows, cols) float64, 0..255

    @property
    def rows(self) -> int:
        return self.luminance.shape[0]

    @property
    def cols(self) -> int:
        return self.luminance.shape[1]


def grid_size(image_width: int, image_height: int, columns: int) -> Tuple[int, int]:
    """Return (cols, rows) for ``columns`` output characters, keeping aspect."""
    rows = math.floor((image_height / image_width) * columns * CELL_ASPECT + 0.5)
    return columns, max(1, rows)


def luminance(rgb: np.ndarray) -> np.ndarray:
    """Weighted gray value of an (..., 3) RGB array."""
    return np.asarray(rgb, dtype=np.float64) @ LUMA_WEIGHTS


def flatten_alpha(buffer: PixelBuffer) -> Image.Image:
    """Composite the buffer over white and return an RGB image."""
    img = Image.fromarray(buffer.rgba)
    if img.getextrema()[3][0] == 255:
        return img.convert("RGB")
    background = Image.new("RGBA", img.size, (255, 255, 255, 255))
    return Image.alpha_composite(background, img).convert("RGB")


# -----------------------------
# Contrast enhancement
# -----------------------------

def percentile_bounds(rgb: np.ndarray, low: float = ENHANCE_PERCENTILES[0], high: float = ENHANCE_PERCENTILES[1]):
    """Luminance values at the ``low``/``high`` percentiles of the whole image."""
    lum = luminance(rgb)
    lo_v, hi_v = np.percentile(lum, [low, high])
    return float(lo_v), float(hi_v)


def stretch_contrast(rgb: np.ndarray, lo_v: float, hi_v: float) -> np.ndarray:
    """Linearly remap [lo_v, hi_v] to [0, 255], clipping outside values."""
    if hi_v <= lo_v:
        return np.asarray(rgb, dtype=np.float64)
    out = (np.asarray(rgb, dtype=np.float64) - lo_v) * (255.0 / (hi_v - lo_v))
    return np.clip(out, 0.0, 255.0)


def _bounds_sample(img: Image.Image) -> Image.Image:
    factor = math.ceil(math.sqrt(img.width * img.height / ENHANCE_SAMPLE_PIXELS))
    return img.reduce(factor) if factor > 1 else img


def enhance_image(img: Image.Image) -> Image.Image:
    """Apply the percentile contrast stretch to every channel of an RGB image."""
    lo_v, hi_v = percentile_bounds(np.asarray(_bounds_sample(img), dtype=np.float64))
    LOG.debug("Enhance: stretching luminance %.1f..%.1f to 0..255", lo_v, hi_v)
    lut = np.rint(stretch_contrast(np.arange(256), lo_v, hi_v)).astype(np.uint8)
    return img.point(lut.tolist() * 3)


# -----------------------------
# Area-average sampling
# -----------------------------

def _box_resize(img: Image.Image, cols: int, rows: int) -> np.ndarray:
    """Per-band BOX resize in float mode; returns (rows, cols, bands) float64."""
    bands = [
        np.asarray(band.convert("F").resize((cols, rows), resample=Image.Resampling.BOX), dtype=np.float64)
        for band in img.split()
    ]
    return np.stack(bands, axis=-1)


def sample_grid(buffer: PixelBuffer, cols: int, rows: int, enhance: bool = False) -> SampledGrid:
    img = flatten_alpha(buffer)
    if enhance:
        img = enhance_image(img)

    cells = np.clip(_box_resize(img, cols, rows), 0.0, 255.0)
    LOG.debug("Sampled %dx%d image into %dx%d cells", buffer.width, buffer.height, cols, rows)
    return SampledGrid(rgb=cells, luminance=np.clip(luminance(cells), 0.0, 255.0))
