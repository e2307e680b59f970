"""Display utilities for pacdb CLI.

Output modes:
- columns: Multi-column package name layout (default)
- flat: One item per line (parsable by scripts)
- json: JSON output (programmatic consumption)
"""

import json
import shutil
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional, Sequence


class DisplayMode(Enum):
    """Output display mode."""
    COLUMNS = "columns"
    FLAT = "flat"
    JSON = "json"


# Global display settings
_display_mode = DisplayMode.COLUMNS
_show_all = False


def init(mode: str = "columns", show_all: bool = False):
    """Initialize display settings.

    Args:
        mode: Display mode ("columns", "flat", "json")
        show_all: If True, never truncate column output
    """
    global _display_mode, _show_all
    _display_mode = DisplayMode(mode) if mode else DisplayMode.COLUMNS
    _show_all = show_all


def get_mode() -> DisplayMode:
    """Get current display mode."""
    return _display_mode


def get_terminal_width() -> int:
    """Get terminal width, with fallback to 80 columns."""
    try:
        return shutil.get_terminal_size().columns
    except (OSError, ValueError):
        return 80


def format_json(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2)


def format_package_list(
    names: Sequence[str],
    max_lines: int = 20,
    show_all: Optional[bool] = None,
    indent: int = 2,
    column_gap: int = 2,
    terminal_width: Optional[int] = None
) -> List[str]:
    """Lay out package names in columns, filling rows left to right.

    Flat and JSON output do not go through here, they print the names
    as they are.

    Args:
        names: Package names, already sorted
        max_lines: Rows shown before "... and N more" unless show_all
        show_all: Override global show_all setting
        indent: Spaces before each row
        column_gap: Minimum spaces between columns
        terminal_width: Override terminal width (for testing)
    """
    if not names:
        return []

    effective_show_all = show_all if show_all is not None else _show_all

    width = terminal_width or get_terminal_width()
    col_width = max(len(n) for n in names) + column_gap
    num_cols = max(1, (width - indent) // col_width)

    total = len(names)
    total_lines = (total + num_cols - 1) // num_cols
    lines_to_show = total_lines if effective_show_all else min(max_lines, total_lines)
    hidden = max(0, total - lines_to_show * num_cols)

    prefix = " " * indent
    result = []
    for line_idx in range(lines_to_show):
        row = names[line_idx * num_cols:(line_idx + 1) * num_cols]
        result.append(prefix + "".join(n.ljust(col_width) for n in row).rstrip())

    if hidden > 0:
        result.append(prefix + f"... and {hidden} more (use --show-all)")

    return result


def format_metadata(metadata: Mapping[str, Sequence[str]],
                    key_func: Optional[Callable[[str], str]] = None) -> List[str]:
    """Format desc fields as an aligned 'key : value' listing.

    Multi-valued fields continue on following lines under the first value.
    """
    if not metadata:
        return []

    width = max(len(k) for k in metadata)
    result = []
    for key, values in metadata.items():
        label = key.ljust(width)
        if key_func:
            label = key_func(label)
        if not values:
            result.append(f"{label} :")
            continue
        result.append(f"{label} : {values[0]}")
        for value in values[1:]:
            result.append(f"{' ' * width}   {value}")
    return result


def print_lines(lines: List[str]) -> None:
    for line in lines:
        print(line)
