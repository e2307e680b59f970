"""CLI command modules."""

from .query import (
    cmd_info,
    cmd_list,
    cmd_dump,
)

__all__ = [
    'cmd_info',
    'cmd_list',
    'cmd_dump',
]
