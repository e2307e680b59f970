"""
Tar archive reading for pacdb

A sync database is a tar archive with one directory per package:

    <name>-<version>-<rel>/desc     - Package metadata (what we parse)
    <name>-<version>-<rel>/files    - File list (.files databases only)

Entries are read in stream mode: each entry must be consumed before
moving to the next one.
"""

import io
import logging
import tarfile
from pathlib import PurePosixPath
from typing import BinaryIO, Iterator, NamedTuple

from .errors import DatabaseError, ErrorKind

logger = logging.getLogger(__name__)

DESC_ENTRY = 'desc'


class ArchiveEntry(NamedTuple):
    """A regular file inside the archive."""
    path: str
    reader: BinaryIO


def is_desc_entry(path: str) -> bool:
    """Return True if the last segment of path is exactly 'desc'."""
    return PurePosixPath(path).name == DESC_ENTRY


def iter_entries(data: bytes) -> Iterator[ArchiveEntry]:
    """Iterate over the regular files of a tar archive.

    Args:
        data: Decompressed archive bytes

    Yields:
        ArchiveEntry for each regular file, in archive order

    Raises:
        DatabaseError: ARCHIVE if the tar framing is invalid
    """
    if not data:
        # An empty payload is an empty repository
        return

    try:
        tar = tarfile.open(fileobj=io.BytesIO(data), mode='r|')
    except tarfile.TarError as e:
        raise DatabaseError(ErrorKind.ARCHIVE, f"Invalid archive: {e}") from e

    try:
        while True:
            try:
                member = tar.next()
            except tarfile.TarError as e:
                raise DatabaseError(ErrorKind.ARCHIVE, f"Invalid archive: {e}") from e
            if member is None:
                # tarfile also stops quietly on a bad header past the
                # first member; only NUL padding may follow the last one
                if data[tar.offset:].strip(b'\0'):
                    raise DatabaseError(
                        ErrorKind.ARCHIVE,
                        f"Invalid archive: corrupt header at offset {tar.offset}"
                    )
                break
            if not member.isfile():
                continue
            reader = tar.extractfile(member)
            if reader is None:
                continue
            yield ArchiveEntry(member.name, reader)
    finally:
        tar.close()


def iter_desc_entries(data: bytes) -> Iterator[ArchiveEntry]:
    """Iterate over the desc entries of a tar archive, skipping the rest."""
    for entry in iter_entries(data):
        if not is_desc_entry(entry.path):
            logger.debug(f"Skipping archive entry {entry.path}")
            continue
        yield entry


def read_entry(entry: ArchiveEntry) -> bytes:
    """Read the whole content of an entry.

    Raises:
        DatabaseError: ARCHIVE if the entry data is truncated
    """
    try:
        return entry.reader.read()
    except tarfile.TarError as e:
        raise DatabaseError(ErrorKind.ARCHIVE, f"Cannot read entry: {e}",
                            entry=entry.path) from e
