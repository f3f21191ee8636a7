#!/usr/bin/env python3
import argparse
import logging
import os
import sys
import time
from typing import Optional

from .charsets import CHARACTER_SETS
from .colorizer import EFFECTS
from .errors import DecodeError, InvalidOptionsError
from .options import DEFAULT_WIDTH, PRESETS, ProcessOptions, preset
from .pipeline import convert

LOG = logging.getLogger("asciifier")

FORMATS = ("plain", "ansi", "html")


# -----------------------------
# Logging
# -----------------------------
def setup_logging(level: int = logging.WARNING, log_path: Optional[str] = None) -> None:
    LOG.setLevel(logging.DEBUG if log_path else level)

    handlers: list[logging.Handler] = []

    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level)
    sh.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    handlers.append(sh)

    if log_path:
        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        handlers.append(fh)

    LOG.handlers[:] = handlers
    LOG.propagate = False  # prevent double logging via root logger


def infer_format(out_format: Optional[str], out_path: Optional[str]) -> str:
    if out_format is not None:
        return out_format
    if out_path:
        ext = os.path.splitext(out_path)[1].lower()
        if ext in (".html", ".htm"):
            return "html"
        if ext == ".ans":
            return "ansi"
    return "plain"


def build_options(args) -> ProcessOptions:
    overrides = {}
    if args.width is not None:
        overrides["width"] = args.width
    if args.style is not None:
        overrides["style"] = args.style
    if args.chars is not None:
        overrides["chars"] = args.chars
    if args.color:
        overrides["use_color"] = True
    if args.rainbow:
        overrides["rainbow"] = True
    if args.effect is not None:
        overrides["effect"] = args.effect
        overrides["rainbow"] = True
    if args.invert:
        overrides["invert"] = True
    if args.enhance:
        overrides["enhance"] = True
    if args.seed is not None:
        overrides["seed"] = args.seed

    if args.preset:
        return preset(args.preset, **overrides)
    return ProcessOptions(**overrides)


# -----------------------------
# CLI
# -----------------------------
def main(argv=None):
    ap = argparse.ArgumentParser(
        prog="asciifier image",
        description="Convert an image to text art (plain, ANSI-colored, or HTML)",
    )
    ap.add_argument("input", help="Input image path")
    ap.add_argument(
        "-o", "--output", default=None, help="Output file (default: stdout)"
    )
    ap.add_argument(
        "-w",
        "--width",
        type=int,
        default=None,
        help=f"Output columns, clamped to 1..400 (default: {DEFAULT_WIDTH})",
    )
    ap.add_argument(
        "-s",
        "--style",
        default=None,
        choices=sorted(CHARACTER_SETS),
        help="Character ramp (default: classic)",
    )
    ap.add_argument(
        "--chars",
        default=None,
        help="Custom ramp, emptiest glyph first (overrides --style)",
    )

    color = ap.add_mutually_exclusive_group()
    color.add_argument(
        "-c", "--color", action="store_true", help="Color glyphs with the sampled pixel color"
    )
    color.add_argument(
        "--rainbow", action="store_true", help="Color glyphs with a synthetic gradient effect"
    )
    ap.add_argument(
        "--effect",
        default=None,
        choices=list(EFFECTS),
        help="Gradient effect for --rainbow (implies --rainbow; default: rainbow)",
    )
    ap.add_argument("--seed", type=int, default=None, help="Seed for random effects (matrix)")

    ap.add_argument(
        "--invert", action="store_true", help="Invert brightness (light on dark)"
    )
    ap.add_argument(
        "--enhance", action="store_true", help="Stretch contrast before sampling"
    )
    ap.add_argument(
        "--preset", default=None, choices=sorted(PRESETS), help="Start from a preset"
    )

    ap.add_argument(
        "-f",
        "--format",
        dest="out_format",
        choices=FORMATS,
        default=None,
        help="Output encoding (default: inferred from --output extension, else plain)",
    )
    ap.add_argument(
        "--ansi-256", action="store_true", help="Use 256-color ANSI escapes instead of 24-bit"
    )

    ap.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level (default: WARNING)",
    )
    ap.add_argument("--log", dest="log_path", default=None, help="Also write a debug log to FILE")

    args = ap.parse_args(argv)
    if args.color and args.effect is not None:
        ap.error("argument --effect: not allowed with argument -c/--color")
    setup_logging(getattr(logging, args.log_level), args.log_path)

    t0 = time.perf_counter()
    out_format = infer_format(args.out_format, args.output)
    LOG.debug("Args: input=%s output=%s format=%s", args.input, args.output, out_format)

    try:
        options = build_options(args)
        result = convert(args.input, options)
    except (DecodeError, InvalidOptionsError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if out_format == "ansi":
        text = result.to_ansi(truecolor=not args.ansi_256)
    elif out_format == "html":
        if args.output:
            text = result.to_html_document(title=os.path.basename(args.input))
        else:
            text = result.to_html()
    else:
        text = result.to_plain_text()

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text + "\n")
    else:
        print(text)

    LOG.debug("Done in %.3fs", time.perf_counter() - t0)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
