"""Error type for database loading.

Every failure of the loading pipeline is reported as a DatabaseError
tagged with an ErrorKind, so callers branch on ``err.kind`` instead of
on exception classes.
"""

from enum import Enum
from pathlib import Path
from typing import Optional, Union


class ErrorKind(Enum):
    """What went wrong while loading a database."""
    NOT_FOUND = "not_found"  # Path does not exist
    IO = "io"                # Read failure
    DECODE = "decode"        # Neither zstd nor gzip could decode the file
    ARCHIVE = "archive"      # Tar framing is invalid
    PARSE = "parse"          # A desc entry is malformed


class DatabaseError(Exception):
    """Raised when a sync database cannot be loaded.

    Attributes:
        kind: ErrorKind of the failure
        message: Human readable description
        path: Database file (or directory) involved, if known
        entry: Archive entry involved, for ARCHIVE and PARSE errors
    """

    def __init__(self, kind: ErrorKind, message: str,
                 path: Optional[Union[str, Path]] = None,
                 entry: Optional[str] = None):
        self.kind = kind
        self.message = message
        self.path = path
        self.entry = entry
        super().__init__(message)

    def __str__(self) -> str:
        text = self.message
        if self.entry is not None:
            text += f" in entry {self.entry}"
        if self.path is not None:
            text += f" ({self.path})"
        return text

    def __repr__(self) -> str:
        return (f"DatabaseError({self.kind.name}, {self.message!r}, "
                f"path={self.path!r}, entry={self.entry!r})")


def not_found(path: Union[str, Path]) -> DatabaseError:
    return DatabaseError(ErrorKind.NOT_FOUND, "File not found", path)


def io_error(exc: OSError, path: Optional[Union[str, Path]] = None) -> DatabaseError:
    """Wrap an OSError; the caller chains it with ``raise ... from exc``."""
    return DatabaseError(ErrorKind.IO, f"An I/O error occurred: {exc}", path)
