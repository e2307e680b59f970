"""
Compression handling for pacdb

Sync databases are written either zstd compressed (current repo-add
default) or gzip compressed (older repositories, some mirrors). The
format is not announced anywhere, so decoding tries zstd first and
falls back to gzip on the same bytes.
"""

import gzip
import io
import logging
import zlib
from typing import BinaryIO, NamedTuple

from .errors import DatabaseError, ErrorKind, io_error

logger = logging.getLogger(__name__)

# Magic bytes, only used to describe undecodable input in errors
MAGIC_ZSTD = b'\x28\xb5\x2f\xfd'
MAGIC_GZIP = b'\x1f\x8b'
MAGIC_XZ = b'\xfd7zXZ\x00'
MAGIC_BZ2 = b'BZ'

FORMAT_ZSTD = 'zstd'
FORMAT_GZIP = 'gzip'


class DecodeResult(NamedTuple):
    """Decompressed payload and the codec that produced it."""
    data: bytes
    fmt: str


def detect_format(data: bytes) -> str:
    """Guess compression format from magic bytes.

    Args:
        data: First 8+ bytes of the file

    Returns:
        Format name: 'zstd', 'gzip', 'xz', 'bzip2', or 'plain'
    """
    if data[:4] == MAGIC_ZSTD:
        return 'zstd'
    elif data[:2] == MAGIC_GZIP:
        return 'gzip'
    elif data[:6] == MAGIC_XZ:
        return 'xz'
    elif data[:2] == MAGIC_BZ2:
        return 'bzip2'
    else:
        return 'plain'


def _zstd():
    try:
        import zstandard
    except ImportError:
        raise ImportError(
            "Module 'zstandard' required for zstd decompression. "
            "Install with: pip install zstandard"
        )
    return zstandard


def _read_zstd(stream: BinaryIO) -> bytes:
    """Decode every zstd frame of the stream.

    Raises:
        ZstdError: on corrupt data, or when the input ends inside a frame
    """
    zstd = _zstd()
    dctx = zstd.ZstdDecompressor()
    data = stream.read()
    chunks = []
    while data:
        dobj = dctx.decompressobj()
        chunks.append(dobj.decompress(data))
        if not dobj.eof:
            raise zstd.ZstdError("input ends inside a zstd frame")
        data = dobj.unused_data
    return b''.join(chunks)


def _read_gzip(stream: BinaryIO) -> bytes:
    # GzipFile reads every member of a concatenated stream
    with gzip.GzipFile(fileobj=stream, mode='rb') as gz:
        return gz.read()


def decompress(stream: BinaryIO) -> DecodeResult:
    """Decompress a seekable binary stream, zstd first then gzip.

    The stream is rewound to its starting position before the gzip
    attempt. Only the gzip failure is reported when both codecs fail;
    the zstd failure is logged at debug level.

    Args:
        stream: Seekable binary stream positioned at the compressed data

    Returns:
        DecodeResult with the decompressed bytes and 'zstd' or 'gzip'

    Raises:
        DatabaseError: DECODE if neither codec accepts the data,
            IO if the stream itself cannot be read
    """
    zstd = _zstd()

    try:
        start = stream.tell()
        head = stream.read(8)
        if not head:
            # Nothing to decode
            return DecodeResult(b'', FORMAT_ZSTD)
        stream.seek(start)

        try:
            return DecodeResult(_read_zstd(stream), FORMAT_ZSTD)
        except zstd.ZstdError as e:
            logger.debug(f"zstd decoding failed ({e}), retrying as gzip")

        stream.seek(start)

        try:
            return DecodeResult(_read_gzip(stream), FORMAT_GZIP)
        except (gzip.BadGzipFile, EOFError, zlib.error) as e:
            raise DatabaseError(
                ErrorKind.DECODE,
                f"Cannot decompress data as zstd or gzip "
                f"(detected: {detect_format(head)}): {e}"
            ) from e
    except OSError as e:
        raise io_error(e) from e


def decompress_bytes(data: bytes) -> DecodeResult:
    """Decompress in-memory bytes, see decompress()."""
    return decompress(io.BytesIO(data))
