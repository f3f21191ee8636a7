# unified_cli.py
import importlib
import inspect
import sys
from typing import List, Optional, Sequence

PROG = "asciifier"

COMMANDS = {
    "image": "asciifier.image_to_ascii",
    "styles": "asciifier.charsets",
}

DESCRIPTIONS = {
    "image": "convert an image file to plain, ANSI, or HTML text art",
    "styles": "list glyph ramps and rainbow effects",
}


def usage(prog: Optional[str] = None) -> None:
    prog = prog or PROG
    print(f"Usage: {prog} <command> [args...]")
    print("Commands:")
    for cmd in sorted(COMMANDS):
        print(f"  {cmd:<8} {DESCRIPTIONS.get(cmd, '')}")


def _call_entry(entry, argv: List[str], module_prog: Optional[str] = None) -> int:
    try:
        sig = inspect.signature(entry)
        # Entries that take an argv parameter get it directly.
        if len(sig.parameters) >= 1:
            return entry(argv)

        # Otherwise the entry parses sys.argv; swap it in for the call.
        old_argv = list(sys.argv)
        try:
            sys.argv = [module_prog or old_argv[0]] + list(argv)
            return entry()
        finally:
            sys.argv = old_argv
    except SystemExit as se:
        code = se.code
        return code if isinstance(code, int) else 0
    except Exception as e:
        print(f"Error running command: {e}", file=sys.stderr)
        return 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    argv = list(argv)

    if not argv or argv[0] in ("-h", "--help"):
        usage()
        return 0

    if argv[0] == "--version":
        from . import __version__

        print(f"{PROG} {__version__}")
        return 0

    cmd, *args = argv
    module_path = COMMANDS.get(cmd)
    if not module_path:
        print(f"Unknown command: {cmd}", file=sys.stderr)
        usage()
        return 2

    try:
        module = importlib.import_module(module_path)
    except Exception as e:
        print(f"Failed to import command '{cmd}' ({module_path}): {e}", file=sys.stderr)
        return 3

    entry = getattr(module, "main", None)
    if not callable(entry):
        print(f"Command module '{module_path}' has no callable 'main'", file=sys.stderr)
        return 4

    result = _call_entry(entry, args, module_prog=f"{PROG} {cmd}")
    return result if isinstance(result, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
