#!/usr/bin/env python3
"""Named glyph ramps, ordered from the emptiest glyph to the densest."""

import argparse
import logging
from typing import Optional

from .colorizer import EFFECTS

LOG = logging.getLogger(__name__)

DEFAULT_STYLE = "classic"

# -----------------------------
# Ramps (index 0 is background)
# -----------------------------
CHARACTER_SETS = {
    "classic": " .:-=+*#%@",
    "dense": " .'`^\",:;Il!i><~+_-?][}{1)(|\\/tfjrxnuvczXYUJCLQ0OZmwqpdbkhao*#MW&8%B@$",
    "blocks": " ░▒▓█",
    "dots": " ·•○●",
    "minimal": " .-+#",
    "retro": " .,;:clodxkO0KXNWM",
    "braille": " ⠁⠃⠇⠏⠟⠿⣿",
    "shades": " ▁▂▃▄▅▆▇█",
    "geometric": " ◦▫▪■",
    "hearts": " ♡♥",
    "gradient": " ░▒▓█",
}

STYLE_DESCRIPTIONS = {
    "classic": "The timeless ASCII choice",
    "dense": "70 characters for extreme detail",
    "blocks": "Clean geometric blocks",
    "dots": "Simple circular progression",
    "minimal": "Minimalist approach",
    "retro": "Classic computer aesthetic",
    "braille": "High-resolution braille patterns",
    "shades": "Smooth gradients",
    "geometric": "Clean geometric shapes",
    "hearts": "For the romantics",
    "gradient": "Smooth block gradients",
}


def resolve_style(style: Optional[str]) -> str:
    """Return a known style name, falling back to classic."""
    if style in CHARACTER_SETS:
        return style
    if style is not None:
        LOG.warning("Unknown style %r, falling back to %s", style, DEFAULT_STYLE)
    return DEFAULT_STYLE


def get_characters(style: Optional[str]) -> str:
    return CHARACTER_SETS[resolve_style(style)]


def clean_charset(chars: str) -> str:
    """Drop line breaks and repeated glyphs, keeping first-seen order."""
    seen = set()
    return "".join(
        [ch for ch in chars if (ch not in seen and not seen.add(ch) and ch not in "\r\n")]
    )


# -----------------------------
# CLI
# -----------------------------
def main(argv=None):
    ap = argparse.ArgumentParser(
        prog="asciifier styles", description="List glyph ramps and rainbow effects"
    )
    ap.add_argument(
        "--ramps", action="store_true", help="Print the ramp characters next to each style"
    )
    args = ap.parse_args(argv)

    print("Styles:")
    width = max(len(name) for name in CHARACTER_SETS)
    for name, chars in CHARACTER_SETS.items():
        line = f"  {name.ljust(width)}  {STYLE_DESCRIPTIONS[name]}"
        if args.ramps:
            line += f"  [{chars}]"
        print(line)

    print("Effects:")
    print("  " + ", ".join(EFFECTS))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
