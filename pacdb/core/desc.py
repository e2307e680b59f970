"""
desc file parser for pacdb

Each package directory of a sync database holds a desc file made of
blocks. A block starts with a %KEY% marker line and continues with one
value per line until the next marker:

    %NAME%
    example-pkg
    %VERSION%
    1.2.3-1
    %DEPENDS%
    libfoo
    libbar>=2.0

Keys are stored lower-cased with every '%' removed. Blank lines are
separators, never values.
"""

import logging
from dataclasses import dataclass, field
from functools import reduce
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, NamedTuple, Optional, Tuple

from .errors import DatabaseError, ErrorKind

logger = logging.getLogger(__name__)

MARKER = '%'
NAME_KEY = 'name'


@dataclass(frozen=True)
class Package:
    """One parsed desc entry."""
    name: str
    metadata: Mapping[str, Tuple[str, ...]] = field(repr=False)

    def get(self, key: str, default: Optional[Tuple[str, ...]] = None) -> Optional[Tuple[str, ...]]:
        """Return the value lines of a field (key is case-insensitive)."""
        return self.metadata.get(key.lower(), default)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'metadata': {key: list(values) for key, values in self.metadata.items()},
        }


class ParseState(NamedTuple):
    """Reducer state while folding over desc lines."""
    key: Optional[str]               # Open block, None before the first marker
    values: Tuple[str, ...]          # Values of the open block
    committed: Tuple[Tuple[str, Tuple[str, ...]], ...]  # Closed blocks, in order


INITIAL_STATE = ParseState(None, (), ())


def _commit(state: ParseState) -> Tuple[Tuple[str, Tuple[str, ...]], ...]:
    if state.key is None:
        return state.committed
    return state.committed + ((state.key, state.values),)


def step(state: ParseState, line: str) -> ParseState:
    """Advance the parser by one line."""
    if line.startswith(MARKER):
        return ParseState(line.replace(MARKER, '').lower(), (), _commit(state))
    if not line:
        return state
    if state.key is None:
        logger.debug(f"Ignoring value outside of any block: {line!r}")
        return state
    return state._replace(values=state.values + (line,))


def flush(state: ParseState) -> Dict[str, Tuple[str, ...]]:
    """Close the open block and build the field mapping.

    A key seen twice keeps the values of its last block.
    """
    return dict(_commit(state))


def split_lines(text: str) -> Iterable[str]:
    """Split on newlines, tolerating CRLF line endings."""
    lines = text.split('\n')
    if lines and lines[-1] == '':
        lines.pop()
    return (line[:-1] if line.endswith('\r') else line for line in lines)


def parse_fields(text: str) -> Dict[str, Tuple[str, ...]]:
    """Parse desc text into a mapping of key to value lines."""
    return flush(reduce(step, split_lines(text), INITIAL_STATE))


def parse_desc(text: str, source: Optional[str] = None) -> Package:
    """Parse desc text into a Package.

    Args:
        text: Content of a desc entry
        source: Archive entry path, used in error messages

    Returns:
        Package named after the first line of its %NAME% block

    Raises:
        DatabaseError: PARSE if the NAME block is missing or empty
    """
    fields = parse_fields(text)

    names = fields.get(NAME_KEY)
    if names is None:
        raise DatabaseError(ErrorKind.PARSE, "Missing %NAME% block", entry=source)
    if not names:
        raise DatabaseError(ErrorKind.PARSE, "Empty %NAME% block", entry=source)

    return Package(name=names[0], metadata=MappingProxyType(fields))


def parse_desc_bytes(data: bytes, source: Optional[str] = None) -> Package:
    """Decode a desc entry as strict UTF-8 and parse it.

    Raises:
        DatabaseError: PARSE on invalid UTF-8 or a missing/empty NAME
    """
    try:
        text = data.decode('utf-8')
    except UnicodeDecodeError as e:
        raise DatabaseError(ErrorKind.PARSE, f"Invalid UTF-8: {e}", entry=source) from e
    return parse_desc(text, source)
