"""Conversion options and presets."""

import dataclasses
import numbers
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .charsets import resolve_style
from .colorizer import resolve_effect
from .errors import InvalidOptionsError

MIN_WIDTH = 1
MAX_WIDTH = 400
DEFAULT_WIDTH = 80

# camelCase names accepted from the web form payload
_ALIASES = {
    "useColor": "use_color",
    "color": "use_color",
    "charset": "chars",
}


@dataclass(frozen=True)
class ProcessOptions:
    width: int = DEFAULT_WIDTH  # output columns; rows follow from the aspect ratio
    style: str = "classic"
    use_color: bool = False
    rainbow: bool = False  # synthetic effect colors, wins over use_color
    invert: bool = False
    enhance: bool = False  # 5th..95th percentile contrast stretch
    effect: str = "rainbow"
    chars: Optional[str] = None  # custom ramp, overrides style
    seed: Optional[int] = None  # seeds random effects (matrix)

    def normalized(self) -> "ProcessOptions":
        """Copy with width clamped and unknown style/effect replaced by defaults."""
        width = self.width
        if isinstance(width, numbers.Integral) and not isinstance(width, bool):
            width = int(width)
        elif isinstance(width, float) and width.is_integer():
            width = int(width)
        else:
            raise InvalidOptionsError(f"width must be an integer, got {self.width!r}")
        width = max(MIN_WIDTH, min(MAX_WIDTH, width))
        if self.chars is not None and not isinstance(self.chars, str):
            raise InvalidOptionsError("chars must be a string")
        return dataclasses.replace(
            self,
            width=width,
            style=resolve_style(self.style),
            effect=resolve_effect(self.effect),
            use_color=bool(self.use_color),
            rainbow=bool(self.rainbow),
            invert=bool(self.invert),
            enhance=bool(self.enhance),
        )

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "ProcessOptions":
        known = {f.name for f in dataclasses.fields(cls)}
        kwargs = {}
        for key, value in values.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise InvalidOptionsError(f"Unknown option: {key}")
            kwargs[name] = value
        return cls(**kwargs)


# -----------------------------
# Presets
# -----------------------------

PRESETS = {
    "classic": ProcessOptions(style="classic", width=80),
    "color": ProcessOptions(style="classic", width=80, use_color=True, enhance=True),
    "inverted": ProcessOptions(style="classic", width=80, invert=True),
    "detailed": ProcessOptions(style="retro", width=120),
}


def preset(name: str, **overrides) -> ProcessOptions:
    try:
        base = PRESETS[name.lower()]
    except KeyError:
        raise InvalidOptionsError(
            f"Unknown preset {name!r} (choose from {', '.join(PRESETS)})"
        ) from None
    return dataclasses.replace(base, **overrides)
