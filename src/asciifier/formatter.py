"""Serialize a grid of cells as plain text, ANSI escapes, or HTML spans."""

import html
import re
from dataclasses import dataclass
from itertools import groupby
from typing import Iterable, List, Optional, Sequence, Tuple

from .colorizer import parse_color, rgb_to_ansi256

ESC = "\x1b"
RESET = f"{ESC}[0m"

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")
_TAG_RE = re.compile(r"<[^>]*>")


@dataclass(frozen=True)
class Cell:
    luminance: float
    glyph: str
    color: Optional[str] = None  # "#RRGGBB" or "hsl(h, s%, l%)"


Row = Tuple[Cell, ...]


def _runs(row: Sequence[Cell]) -> Iterable[Tuple[Optional[str], str]]:
    """Yield (color, text) runs; spaces and uncolored cells carry color None."""
    def key(cell):
        return None if cell.glyph == " " else cell.color

    for color, cells in groupby(row, key=key):
        yield color, "".join(c.glyph for c in cells)


def _ansi_open(color: str, truecolor: bool) -> str:
    r, g, b = parse_color(color)
    if truecolor:
        return f"{ESC}[38;2;{r};{g};{b}m"
    return f"{ESC}[38;5;{rgb_to_ansi256(r, g, b)}m"


def format_plain(rows: Sequence[Row]) -> str:
    return "\n".join("".join(c.glyph for c in row) for row in rows)


def format_ansi(rows: Sequence[Row], truecolor: bool = True) -> str:
    out_lines = []
    for row in rows:
        parts = []
        for color, text in _runs(row):
            if color is None:
                parts.append(text)
            else:
                parts.append(f"{_ansi_open(color, truecolor)}{text}{RESET}")
        out_lines.append("".join(parts))
    return "\n".join(out_lines)


def format_html(rows: Sequence[Row]) -> str:
    """HTML lines (no surrounding <pre>)."""
    out_lines = []
    for row in rows:
        parts = []
        for color, text in _runs(row):
            if color is None:
                parts.append(html.escape(text))
            else:
                parts.append(f'<span style="color: {color};">{html.escape(text)}</span>')
        out_lines.append("".join(parts))
    return "\n".join(out_lines)


def wrap_html(pre_body: str, title="ASCII Art", font_size_px=12, line_height_px=None):
    # Browsers can drift if line-height is not locked; keep px values.
    if line_height_px is None:
        line_height_px = font_size_px

    return (
        "<!doctype html>\n"
        "<html>\n<head>\n"
        '  <meta charset="utf-8">\n'
        f"  <title>{html.escape(title)}</title>\n"
        "  <style>\n"
        "    html, body { margin: 0; background: #000; color: #fff; }\n"
        "    pre {\n"
        "      margin: 0;\n"
        "      padding: 16px;\n"
        "      white-space: pre;\n"
        '      font-family: "Courier New", Monaco, Menlo, monospace;\n'
        f"      font-size: {font_size_px}px;\n"
        f"      line-height: {line_height_px}px;\n"
        "    }\n"
        "  </style>\n"
        "</head>\n<body>\n"
        "<pre>" + pre_body + "</pre>\n"
        "</body>\n</html>\n"
    )


def strip_ansi(text: str) -> str:
    return _ANSI_RE.sub("", text)


def strip_markup(text: str) -> str:
    """Drop HTML tags and decode entities, leaving the glyphs."""
    return html.unescape(_TAG_RE.sub("", text))


# -----------------------------
# Result
# -----------------------------

@dataclass(frozen=True)
class AsciiResult:
    rows: Tuple[Row, ...]

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def lines(self) -> List[str]:
        return ["".join(c.glyph for c in row) for row in self.rows]

    def to_plain_text(self) -> str:
        return format_plain(self.rows)

    def to_ansi(self, truecolor: bool = True) -> str:
        return format_ansi(self.rows, truecolor=truecolor)

    def to_html(self) -> str:
        return format_html(self.rows)

    def to_html_document(self, title: str = "ASCII Art", font_size_px: int = 12) -> str:
        return wrap_html(self.to_html(), title=title, font_size_px=font_size_px)

    def __str__(self):
        return self.to_plain_text()
