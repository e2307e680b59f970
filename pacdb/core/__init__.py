"""Core modules for pacdb"""

from .compression import decompress, decompress_bytes
from .archive import iter_desc_entries
from .database import Database, open_database
from .desc import Package, parse_desc
from .errors import DatabaseError, ErrorKind
from .repos import list_databases

__all__ = [
    'decompress',
    'decompress_bytes',
    'iter_desc_entries',
    'Database',
    'open_database',
    'Package',
    'parse_desc',
    'DatabaseError',
    'ErrorKind',
    'list_databases',
]
