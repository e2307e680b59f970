"""
Discovery of sync databases on disk.

The loader only ever takes one explicit path; this module decides which
paths to hand it.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from .config import DB_SUFFIX, get_sync_dir
from .database import Database, open_database
from .desc import Package
from .errors import io_error, not_found

logger = logging.getLogger(__name__)


def list_databases(sync_dir: Union[str, Path]) -> List[Path]:
    """List the *.db files directly inside sync_dir, sorted by name.

    Raises:
        DatabaseError: NOT_FOUND if sync_dir does not exist, IO if it
            cannot be listed
    """
    sync_dir = Path(sync_dir)
    if not sync_dir.exists():
        raise not_found(sync_dir)

    dbs = []
    try:
        for entry in sync_dir.iterdir():
            if entry.suffix != DB_SUFFIX or not entry.is_file():
                continue
            dbs.append(entry)
    except OSError as e:
        raise io_error(e, sync_dir) from e

    dbs.sort(key=lambda p: p.name)
    logger.debug(f"Found {len(dbs)} databases in {sync_dir}")
    return dbs


def resolve_databases(db: Optional[Union[str, Path]] = None,
                      db_dir: Optional[Union[str, Path]] = None) -> List[Path]:
    """Return the databases to work on.

    An explicit database path wins; otherwise every database of the
    sync directory is used.
    """
    if db:
        return [Path(db)]
    return list_databases(get_sync_dir(db_dir))


def find_package(paths: Iterable[Path], name: str) -> Optional[Tuple[Database, Package]]:
    """Open databases in order and return the first one providing name.

    Returns:
        (Database, Package) of the first match, or None
    """
    for path in paths:
        database = open_database(path)
        package = database.lookup(name)
        if package is not None:
            return database, package
    return None
