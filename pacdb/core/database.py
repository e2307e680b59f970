"""
Sync database loading for pacdb

A Database is the in-memory view of one pacman sync database file
(core.db, extra.db, ...). It is built in one go by open_database() and
never modified afterwards.
"""

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Union

from .archive import iter_desc_entries, read_entry
from .compression import decompress
from .desc import Package, parse_desc_bytes
from .errors import DatabaseError, io_error, not_found

logger = logging.getLogger(__name__)


class Database:
    """Packages of one sync database, keyed by name."""

    def __init__(self, file: Union[str, Path], packages: Dict[str, Package],
                 signed: bool = False):
        self._file = Path(file)
        self._packages = MappingProxyType(dict(packages))
        # No signature verification is done, kept for display
        self._signed = signed

    @property
    def file(self) -> Path:
        """Path of the database file."""
        return self._file

    @property
    def signed(self) -> bool:
        return self._signed

    @property
    def packages(self) -> Mapping[str, Package]:
        """Read-only mapping of package name to Package."""
        return self._packages

    def lookup(self, name: str) -> Optional[Package]:
        """Find a package by exact name.

        Returns:
            The Package, or None if this database does not have it
        """
        return self._packages.get(name)

    def __len__(self) -> int:
        return len(self._packages)

    def __contains__(self, name: object) -> bool:
        return name in self._packages

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._packages))

    def __repr__(self) -> str:
        return f"Database({str(self._file)!r}, {len(self._packages)} packages)"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'file': str(self._file),
            'signed': self._signed,
            'packages': {name: pkg.to_dict() for name, pkg in self._packages.items()},
        }


def open_database(path: Union[str, Path]) -> Database:
    """Load a sync database file.

    Any malformed desc entry aborts the whole load: a Database is
    either complete or not returned at all.

    Args:
        path: Path to a zstd or gzip compressed sync database

    Returns:
        Database with one Package per desc entry

    Raises:
        DatabaseError: NOT_FOUND, IO, DECODE, ARCHIVE or PARSE
    """
    path = Path(path)

    try:
        packages = _load_packages(path)
    except DatabaseError as e:
        if e.path is None:
            e.path = path
        raise
    except OSError as e:
        raise io_error(e, path) from e

    logger.debug(f"{path}: loaded {len(packages)} packages")
    return Database(path, packages)


def _load_packages(path: Path) -> Dict[str, Package]:
    if not path.exists():
        raise not_found(path)

    with open(path, 'rb') as f:
        result = decompress(f)

    logger.debug(f"{path}: {result.fmt} stream, {len(result.data)} bytes decompressed")

    packages: Dict[str, Package] = {}
    for entry in iter_desc_entries(result.data):
        package = parse_desc_bytes(read_entry(entry), source=entry.path)
        if package.name in packages:
            logger.debug(f"{path}: duplicate package {package.name} in {entry.path}, replacing")
        packages[package.name] = package
    return packages
