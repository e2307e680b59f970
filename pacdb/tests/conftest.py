"""Fixtures building sync database files on the fly."""

import gzip
import io
import tarfile

import pytest
import zstandard


def build_desc(name, version='1.0-1', **fields) -> bytes:
    """Render a desc file the way repo-add writes it."""
    blocks = [('NAME', [name]), ('VERSION', [version])]
    for key, values in fields.items():
        if isinstance(values, str):
            values = [values]
        blocks.append((key.upper(), values))
    text = ''.join(f"%{key}%\n" + ''.join(f"{v}\n" for v in values) + "\n"
                   for key, values in blocks)
    return text.encode('utf-8')


def build_tar(entries) -> bytes:
    """Build an uncompressed tar archive.

    Args:
        entries: List of (path, bytes) tuples, bytes=None for a directory
    """
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode='w', format=tarfile.USTAR_FORMAT) as tar:
        for path, data in entries:
            info = tarfile.TarInfo(path)
            if data is None:
                info.type = tarfile.DIRTYPE
                info.mode = 0o755
                tar.addfile(info)
            else:
                info.size = len(data)
                info.mode = 0o644
                tar.addfile(info, io.BytesIO(data))
    return buf.getvalue()


def compress(data: bytes, compression: str) -> bytes:
    if compression == 'zstd':
        return zstandard.ZstdCompressor().compress(data)
    if compression == 'gzip':
        return gzip.compress(data)
    if compression == 'gzip-multi':
        # Two concatenated gzip members
        half = len(data) // 2
        return gzip.compress(data[:half]) + gzip.compress(data[half:])
    if compression == 'none':
        return data
    raise ValueError(compression)


def repo_entries(packages):
    """Archive entries for (name, version) pairs, with dirs and files entries."""
    entries = []
    for name, version in packages:
        pkgdir = f"{name}-{version}"
        entries.append((f"{pkgdir}/", None))
        entries.append((f"{pkgdir}/desc", build_desc(name, version, DEPENDS=['glibc'])))
        entries.append((f"{pkgdir}/files", b"%FILES%\nusr/\nusr/bin/\n"))
    return entries


SAMPLE_PACKAGES = [
    ('bash', '5.2.026-2'),
    ('glibc', '2.39-1'),
    ('pacman', '6.1.0-3'),
]


@pytest.fixture
def make_db(tmp_path):
    """Factory writing a sync database file into tmp_path.

    Usage: make_db(entries, compression='zstd', name='core.db') -> Path
    """
    def _make(entries, compression='zstd', name='core.db'):
        path = tmp_path / name
        path.write_bytes(compress(build_tar(entries), compression))
        return path
    return _make


@pytest.fixture
def core_db(make_db):
    """A zstd compressed core.db with SAMPLE_PACKAGES."""
    return make_db(repo_entries(SAMPLE_PACKAGES))
