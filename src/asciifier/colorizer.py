"""Per-cell display colors: sampled pixel colors or named synthetic effects."""

import colorsys
import logging
import math
import random
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from .errors import InternalComputationError

LOG = logging.getLogger(__name__)

DEFAULT_EFFECT = "rainbow"

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class HSL:
    h: float  # degrees
    s: float  # percent
    l: float  # percent

    def css(self) -> str:
        return f"hsl({_num(self.h % 360.0)}, {_num(self.s)}%, {_num(self.l)}%)"

    def to_rgb(self) -> RGB:
        return hsl_to_rgb(self.h, self.s, self.l)


def _num(v: float) -> str:
    return f"{round(v, 2) + 0.0:g}"


# -----------------------------
# Effects: (x, y, line_width, total_lines, rng) -> HSL
# -----------------------------

EffectFn = Callable[[int, int, int, int, random.Random], HSL]


def _rainbow(x, y, w, h, rng):
    return HSL(((x + y * 2) * 360 / (w + h * 2)) % 360, 70, 50)


def _fire(x, y, w, h, rng):
    return HSL(60 - (y * 60 / h), 100 - (y * 20 / h), 55)


def _sunrise(x, y, w, h, rng):
    p = y / h
    return HSL(330 + p * 60, 85 + p * 15, 60 + p * 20)


def _unicorn(x, y, w, h, rng):
    return HSL((x * 360 / w) % 360, 95, 65)


def _vaporwave(x, y, w, h, rng):
    p = y / h
    return HSL(280 + p * 80, 80 + math.sin((x + y) * 0.3) * 15, 65 + math.sin(x * 0.4) * 10)


def _cyberpunk(x, y, w, h, rng):
    q = (x + y) / (w + h)
    return HSL(320 - q * 140, 100, 60)


def _ocean(x, y, w, h, rng):
    # cyan (180) -> blue (210)
    p = y / h
    return HSL(180 + p * 30, 70 + p * 20, 50 + p * 20)


def _chrome(x, y, w, h, rng):
    return HSL(200 + math.sin(x * 0.2) * 60, 30, 70 + math.sin(y * 0.3) * 20)


def _neon(x, y, w, h, rng):
    q = (x + y) / (w + h)
    return HSL(60 + math.sin(q * 10) * 120, 100, 60 + math.sin(q * 8) * 15)


def _poison(x, y, w, h, rng):
    # lime green (90) -> yellow-green (120)
    q = (x + y) / (w + h)
    return HSL(90 + q * 30, 90 + math.sin(x * 0.5) * 10, 45 + q * 20)


def _metal(x, y, w, h, rng):
    return HSL(220, 10, 60 + math.sin(x * 0.3) * 20)


def _matrix(x, y, w, h, rng):
    # Only effect that draws from rng; unseeded output is not reproducible.
    return HSL(120, 100, 30 + rng.random() * 40)


EFFECTS: Dict[str, EffectFn] = {
    "rainbow": _rainbow,
    "fire": _fire,
    "sunrise": _sunrise,
    "unicorn": _unicorn,
    "vaporwave": _vaporwave,
    "cyberpunk": _cyberpunk,
    "ocean": _ocean,
    "chrome": _chrome,
    "neon": _neon,
    "poison": _poison,
    "metal": _metal,
    "matrix": _matrix,
}

RANDOM_EFFECTS = frozenset({"matrix"})


def resolve_effect(effect: Optional[str]) -> str:
    if effect in EFFECTS:
        return effect
    if effect is not None:
        LOG.warning("Unknown effect %r, falling back to %s", effect, DEFAULT_EFFECT)
    return DEFAULT_EFFECT


def effect_color(
    effect: str,
    x: int,
    y: int,
    line_width: int,
    total_lines: int,
    rng: Optional[random.Random] = None,
) -> HSL:
    fn = EFFECTS[resolve_effect(effect)]
    return fn(x, y, max(1, line_width), max(1, total_lines), rng or random.Random())


# -----------------------------
# Color strings
# -----------------------------

_HEX_RE = re.compile(r"^#([0-9a-fA-F]{6})$")
_HSL_RE = re.compile(
    r"^hsl\(\s*(-?[\d.]+)\s*,\s*(-?[\d.]+)%\s*,\s*(-?[\d.]+)%\s*\)$"
)


def rgb_hex(r: float, g: float, b: float) -> str:
    r, g, b = (max(0, min(255, int(round(v)))) for v in (r, g, b))
    return f"#{r:02X}{g:02X}{b:02X}"


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    s = max(0.0, min(100.0, s)) / 100.0
    l = max(0.0, min(100.0, l)) / 100.0
    r, g, b = colorsys.hls_to_rgb((h % 360.0) / 360.0, l, s)
    return int(round(r * 255)), int(round(g * 255)), int(round(b * 255))


def parse_color(color: str) -> RGB:
    """Turn a ``#RRGGBB`` or ``hsl(h, s%, l%)`` string into an RGB triple."""
    m = _HEX_RE.match(color)
    if m:
        v = int(m.group(1), 16)
        return (v >> 16) & 0xFF, (v >> 8) & 0xFF, v & 0xFF
    m = _HSL_RE.match(color)
    if m:
        return hsl_to_rgb(float(m.group(1)), float(m.group(2)), float(m.group(3)))
    raise InternalComputationError(f"Unrecognized color string: {color!r}")


def rgb_to_ansi256(r: int, g: int, b: int) -> int:
    """Nearest xterm-256 palette index (6x6x6 cube or gray ramp)."""
    if r == g == b:
        if r < 8:
            return 16
        if r > 238:
            return 231
        return 232 + min(23, (r - 8) // 10)
    q = [int(round(v / 255 * 5)) for v in (r, g, b)]
    return 16 + 36 * q[0] + 6 * q[1] + q[2]


# -----------------------------
# Grid colorization
# -----------------------------

def cell_colors(
    rgb: np.ndarray,
    use_color: bool,
    rainbow: bool,
    effect: str = DEFAULT_EFFECT,
    rng: Optional[random.Random] = None,
) -> List[List[Optional[str]]]:
    """
    Colors for a (rows, cols, 3) grid of sampled RGB values.

    ``rainbow`` wins over ``use_color``; with neither every entry is None.
    """
    rows, cols = rgb.shape[0], rgb.shape[1]
    if rainbow:
        name = resolve_effect(effect)
        fn = EFFECTS[name]
        rng = rng or random.Random()
        LOG.debug("Colorizing %dx%d grid with effect %s", cols, rows, name)
        return [[fn(x, y, cols, rows, rng).css() for x in range(cols)] for y in range(rows)]
    if use_color:
        return [[rgb_hex(*rgb[y, x]) for x in range(cols)] for y in range(rows)]
    return [[None] * cols for _ in range(rows)]
