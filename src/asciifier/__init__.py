"""asciifier - turn images into plain, ANSI, or HTML text art."""

__version__ = "0.1.0"

"""
Expose lightweight lazy wrappers to avoid importing submodules at package
import time. Importing submodules in `__init__` causes `runpy` to warn when
executing a module with `-m` because the submodule may already appear in
`sys.modules` before execution. Wrappers import on-demand.
"""


def convert(*args, **kwargs):
    from .pipeline import convert as _c

    return _c(*args, **kwargs)


def load_image(*args, **kwargs):
    from .loader import load_image as _l

    return _l(*args, **kwargs)


def image_to_ascii_main(*args, **kwargs):
    from .image_to_ascii import main as _m

    return _m(*args, **kwargs)


def styles_main(*args, **kwargs):
    from .charsets import main as _m

    return _m(*args, **kwargs)


__all__ = [
    "convert",
    "load_image",
    "image_to_ascii_main",
    "styles_main",
]
