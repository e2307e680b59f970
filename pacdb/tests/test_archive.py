"""Tests for tar entry iteration"""

import pytest

from conftest import build_desc, build_tar

from pacdb.core.archive import (
    is_desc_entry,
    iter_desc_entries,
    iter_entries,
    read_entry,
)
from pacdb.core.errors import DatabaseError, ErrorKind


class TestIsDescEntry:
    """Tests for desc entry selection."""

    def test_desc_in_package_dir(self):
        assert is_desc_entry('bash-5.2.026-2/desc')

    def test_bare_desc(self):
        assert is_desc_entry('desc')

    def test_files_entry(self):
        assert not is_desc_entry('bash-5.2.026-2/files')

    def test_suffix_is_not_enough(self):
        assert not is_desc_entry('bash-5.2.026-2/xdesc')

    def test_desc_directory(self):
        assert not is_desc_entry('desc/files')


class TestIterEntries:
    """Tests for archive enumeration."""

    def test_regular_files_in_order(self):
        data = build_tar([
            ('a-1/', None),
            ('a-1/desc', b'one'),
            ('a-1/files', b'two'),
            ('b-1/desc', b'three'),
        ])
        seen = [(entry.path, read_entry(entry)) for entry in iter_entries(data)]
        assert seen == [
            ('a-1/desc', b'one'),
            ('a-1/files', b'two'),
            ('b-1/desc', b'three'),
        ]

    def test_desc_filter(self):
        data = build_tar([
            ('a-1/desc', build_desc('a')),
            ('a-1/files', b'%FILES%\n'),
            ('a-1/desc.sig', b'sig'),
        ])
        assert [e.path for e in iter_desc_entries(data)] == ['a-1/desc']

    def test_unread_entries_are_skipped(self):
        data = build_tar([('a-1/files', b'x' * 5000), ('a-1/desc', b'desc')])
        entries = iter_desc_entries(data)
        assert read_entry(next(entries)) == b'desc'

    def test_empty_payload(self):
        assert list(iter_entries(b'')) == []

    def test_empty_archive(self):
        assert list(iter_entries(build_tar([]))) == []

    def test_not_a_tar(self):
        with pytest.raises(DatabaseError) as exc_info:
            list(iter_entries(b'not a tar archive ' * 100))
        assert exc_info.value.kind == ErrorKind.ARCHIVE

    def test_truncated_entry(self):
        data = build_tar([('a-1/desc', b'x' * 2000)])[:1024]
        with pytest.raises(DatabaseError) as exc_info:
            for entry in iter_entries(data):
                read_entry(entry)
        assert exc_info.value.kind == ErrorKind.ARCHIVE

    def test_early_stop(self):
        data = build_tar([('a-1/desc', b'a'), ('b-1/desc', b'b')])
        entries = iter_entries(data)
        assert next(entries).path == 'a-1/desc'
        entries.close()
        with pytest.raises(StopIteration):
            next(entries)

    def test_corrupt_header_after_first_member(self):
        data = bytearray(build_tar([
            ('a-1/desc', build_desc('a')),
            ('b-1/desc', build_desc('b')),
            ('c-1/desc', build_desc('c')),
        ]))
        # Small entries: one header block plus one data block each
        data[1024] ^= 0xFF
        with pytest.raises(DatabaseError) as exc_info:
            for entry in iter_entries(bytes(data)):
                read_entry(entry)
        assert exc_info.value.kind == ErrorKind.ARCHIVE
        assert 'offset 1024' in exc_info.value.message

    def test_trailing_padding_is_accepted(self):
        data = build_tar([('a-1/desc', b'a')]) + b'\0' * 4096
        assert [e.path for e in iter_entries(data)] == ['a-1/desc']
