"""Terminal color helpers for imprint error messages.

ANSI colors are applied only when the output stream is a TTY, unless the
``NO_COLOR`` / ``FORCE_COLOR`` environment variables say otherwise.
"""

from __future__ import annotations

import os
import re
import sys
from typing import Literal

_COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "green": "\033[32m",
    "bright_red": "\033[91m",
    "bright_green": "\033[92m",
}

ColorName = Literal["reset", "bold", "dim", "green", "bright_red", "bright_green"]

_ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


def _should_use_colors() -> bool:
    """Decide once whether to emit ANSI codes.

    ``FORCE_COLOR`` wins over ``NO_COLOR`` (https://no-color.org/); without
    either, colors follow ``sys.stderr.isatty()`` since errors go there.
    """
    if os.environ.get("FORCE_COLOR"):
        return True
    if os.environ.get("NO_COLOR"):
        return False
    return sys.stderr.isatty()


_USE_COLORS = _should_use_colors()


def colorize(text: str, *colors: ColorName) -> str:
    """Wrap ``text`` in ANSI codes, or return it unchanged when colors are off.

    Example:
        >>> colorize("IMP-RUN-001", "bright_red", "bold")
        '\\033[91m\\033[1mIMP-RUN-001\\033[0m'  # with colors
    """
    if not _USE_COLORS or not colors:
        return text
    prefix = "".join(_COLORS.get(color, "") for color in colors)
    if not prefix:
        return text
    return f"{prefix}{text}{_COLORS['reset']}"


def strip_colors(text: str) -> str:
    """Remove ANSI escape sequences from ``text``."""
    return _ANSI_ESCAPE.sub("", text)


def error_code(text: str) -> str:
    return colorize(text, "bright_red", "bold")


def hint(text: str) -> str:
    return colorize(text, "green")


def suggestion(text: str) -> str:
    return colorize(text, "bright_green", "bold")


def dim_text(text: str) -> str:
    return colorize(text, "dim")


def caret_line(column: int) -> str:
    """Pointer line placing ``^`` under ``column`` of the previous line."""
    return f"{dim_text('   |')} {colorize(' ' * column + '^', 'bright_red')}"


def format_error_header(code: str | None, message: str) -> str:
    """Prefix ``message`` with a colored error code when one is given."""
    if code:
        return f"{error_code(code)}: {message}"
    return message
