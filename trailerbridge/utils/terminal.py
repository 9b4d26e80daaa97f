"""Terminal Utilities Module."""

import locale
import os
import sys
from functools import lru_cache

import colorama


@lru_cache(maxsize=1)
def supports_utf8() -> bool:
    """Check if the terminal supports UTF-8 encoding.

    Returns:
        bool: True if stdout encodes UTF-8, False otherwise
    """
    encoding = sys.stdout.encoding or locale.getpreferredencoding(False)
    return encoding.lower().startswith("utf")


@lru_cache(maxsize=1)
def supports_color() -> bool:
    """Check if the terminal can render ANSI color codes.

    Colors are disabled when stdout is not a TTY or when ``NO_COLOR`` is set. On
    Windows, colors are only enabled for terminals known to handle VT sequences.

    Returns:
        bool: True if the terminal supports color, False otherwise
    """
    if "NO_COLOR" in os.environ:
        return False

    if not (hasattr(sys.stdout, "isatty") and sys.stdout.isatty()):
        return False

    if sys.platform == "win32":
        return (
            getattr(colorama, "fixed_windows_console", False)
            or "ANSICON" in os.environ
            or "WT_SESSION" in os.environ  # Windows Terminal
            or os.environ.get("TERM_PROGRAM") == "vscode"
        )

    return True
