"""Image -> glyph grid conversion entry point."""

import logging
import random
from typing import Any, Mapping, Optional, Union

from .colorizer import RANDOM_EFFECTS, cell_colors
from .errors import InternalComputationError
from .formatter import AsciiResult, Cell
from .glyphs import glyph_index, resolve_ramp
from .loader import ImageSource, PixelBuffer, load_image
from .options import ProcessOptions
from .sampler import grid_size, sample_grid

LOG = logging.getLogger(__name__)


def _coerce_options(options) -> ProcessOptions:
    if options is None:
        return ProcessOptions()
    if isinstance(options, ProcessOptions):
        return options
    if isinstance(options, Mapping):
        return ProcessOptions.from_mapping(options)
    raise TypeError(f"options must be ProcessOptions or a mapping, not {type(options).__name__}")


def convert(
    image: Union[PixelBuffer, ImageSource],
    options: Optional[Union[ProcessOptions, Mapping[str, Any]]] = None,
    rng: Optional[random.Random] = None,
) -> AsciiResult:
    """
    Convert an image into a grid of glyph cells.

    Args:
        image: decoded PixelBuffer, or anything ``load_image`` accepts
        options: ProcessOptions or a mapping of option names
        rng: random source for random effects; defaults to one seeded from
            ``options.seed``

    Returns:
        AsciiResult with exactly ``rows`` lines of ``options.width`` cells
    """
    opts = _coerce_options(options).normalized()
    buffer = image if isinstance(image, PixelBuffer) else load_image(image)

    ramp = resolve_ramp(opts.style, opts.chars)
    cols, rows = grid_size(buffer.width, buffer.height, opts.width)
    LOG.debug(
        "Converting %dx%d -> %dx%d (style=%s ramp_len=%d color=%s rainbow=%s effect=%s invert=%s enhance=%s)",
        buffer.width, buffer.height, cols, rows, opts.style, len(ramp),
        opts.use_color, opts.rainbow, opts.effect, opts.invert, opts.enhance,
    )

    sampled = sample_grid(buffer, cols, rows, enhance=opts.enhance)
    if sampled.luminance.shape != (rows, cols):
        raise InternalComputationError(
            f"Sampled grid has shape {sampled.luminance.shape}, expected {(rows, cols)}"
        )

    if rng is None:
        rng = random.Random(opts.seed)
    if opts.rainbow and opts.effect in RANDOM_EFFECTS and opts.seed is None:
        LOG.debug("Effect %s is unseeded; output is not reproducible", opts.effect)
    colors = cell_colors(sampled.rgb, opts.use_color, opts.rainbow, opts.effect, rng)

    n = len(ramp)
    out_rows = []
    for y in range(rows):
        row = []
        for x in range(cols):
            lum = float(sampled.luminance[y, x])
            idx = glyph_index(lum, n, opts.invert)
            row.append(Cell(luminance=lum, glyph=ramp[idx], color=colors[y][x]))
        out_rows.append(tuple(row))

    return AsciiResult(rows=tuple(out_rows))
