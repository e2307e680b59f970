"""Terminal colors for pacdb output.

Each helper names what is being shown (a database, a package, a desc
field) rather than a color, so the palette lives in one place.
"""

import os
import sys

RESET = '\033[0m'

# Role -> ANSI code
PALETTE = {
    'error': '\033[91m',     # red
    'warning': '\033[93m',   # yellow
    'package': '\033[92m',   # green
    'database': '\033[94m',  # blue
    'field': '\033[1m',      # bold
    'note': '\033[2m',       # dim
}

_use_color = False


def init(nocolor: bool = False):
    """Decide once whether to emit ANSI codes.

    Colors are off with --nocolor, when NO_COLOR is set
    (https://no-color.org/) or when stdout is not a terminal.
    """
    global _use_color
    _use_color = not (nocolor or os.environ.get('NO_COLOR') or not sys.stdout.isatty())


def _paint(role: str, text: str) -> str:
    if not _use_color:
        return text
    return f"{PALETTE[role]}{text}{RESET}"


def error(text: str) -> str:
    return _paint('error', text)


def warning(text: str) -> str:
    return _paint('warning', text)


def pkg_name(name: str) -> str:
    """Package name in 'Found package ...' lines."""
    return _paint('package', name)


def db_name(name: str) -> str:
    """Database file name or path."""
    return _paint('database', name)


def field_key(key: str) -> str:
    """desc field label in the metadata listing."""
    return _paint('field', key)


def note(text: str) -> str:
    """Secondary information such as package counts."""
    return _paint('note', text)
