"""Map cell brightness to a glyph from a ramp."""

import math
from typing import Optional

from .charsets import clean_charset, get_characters
from .errors import InternalComputationError, InvalidOptionsError


def resolve_ramp(style: Optional[str], chars: Optional[str] = None) -> str:
    """A custom ``chars`` ramp wins over the named ``style``."""
    if chars is not None:
        ramp = clean_charset(chars)
        if not ramp:
            raise InvalidOptionsError("Custom character ramp is empty")
        return ramp
    return get_characters(style)


def glyph_index(luminance: float, ramp_length: int, invert: bool = False) -> int:
    """
    Index into a light->dark ramp of ``ramp_length`` glyphs.

    Bright cells get the emptiest glyphs: 255 maps to 0 and 0 maps to
    ``ramp_length - 1``. With ``invert`` the mapping is mirrored.
    """
    if ramp_length <= 0:
        raise InvalidOptionsError("Character ramp is empty")
    if math.isnan(luminance):
        raise InternalComputationError("Luminance is NaN")
    lum = 0.0 if luminance < 0 else (255.0 if luminance > 255 else float(luminance))
    idx = math.floor((255.0 - lum) / 256.0 * ramp_length)
    idx = max(0, min(ramp_length - 1, idx))
    if invert:
        return ramp_length - 1 - idx
    return idx


def map_glyph(luminance: float, ramp: str, invert: bool = False) -> str:
    return ramp[glyph_index(luminance, len(ramp), invert)]
