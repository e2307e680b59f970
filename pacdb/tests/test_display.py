"""Tests for output formatting"""

from pacdb.cli.display import format_metadata, format_package_list


class TestFormatPackageList:
    """Tests for the column layout of package names."""

    NAMES = ['bash', 'glibc', 'pacman', 'zstd']

    def test_columns(self):
        lines = format_package_list(self.NAMES, terminal_width=20, indent=2)
        # col width 8, two columns fit in 18 usable chars
        assert lines == ['  bash    glibc', '  pacman  zstd']

    def test_single_column_when_narrow(self):
        lines = format_package_list(self.NAMES, terminal_width=5, show_all=True)
        assert lines == ['  bash', '  glibc', '  pacman', '  zstd']

    def test_columns_truncated(self):
        lines = format_package_list(self.NAMES, terminal_width=10, max_lines=2, show_all=False)
        assert lines[:2] == ['  bash', '  glibc']
        assert lines[2] == '  ... and 2 more (use --show-all)'

    def test_columns_show_all(self):
        lines = format_package_list(self.NAMES, terminal_width=10, max_lines=2, show_all=True)
        assert len(lines) == 4

    def test_empty(self):
        assert format_package_list([]) == []


class TestFormatMetadata:
    """Tests for the key : value listing."""

    def test_aligned_multi_value(self):
        lines = format_metadata({'name': ('foo',), 'depends': ('a', 'b')})
        assert lines == [
            'name    : foo',
            'depends : a',
            '          b',
        ]

    def test_empty_field(self):
        assert format_metadata({'replaces': ()}) == ['replaces :']

    def test_key_func_wraps_label(self):
        lines = format_metadata({'name': ('foo',)}, key_func=lambda k: f"<{k}>")
        assert lines == ['<name> : foo']


class TestColors:
    """Tests for the role-named color helpers."""

    def test_plain_when_disabled(self, monkeypatch):
        from pacdb.cli import colors
        monkeypatch.setattr(colors, '_use_color', False)
        assert colors.pkg_name('bash') == 'bash'
        assert colors.db_name('core.db') == 'core.db'

    def test_palette_roles(self, monkeypatch):
        from pacdb.cli import colors
        monkeypatch.setattr(colors, '_use_color', True)
        assert colors.pkg_name('bash') == f"{colors.PALETTE['package']}bash{colors.RESET}"
        assert colors.field_key('name') == f"{colors.PALETTE['field']}name{colors.RESET}"
        assert colors.note('(3 packages)').startswith(colors.PALETTE['note'])

    def test_nocolor_flag(self, monkeypatch):
        from pacdb.cli import colors
        monkeypatch.setattr(colors, '_use_color', True)
        colors.init(nocolor=True)
        assert colors.error('Error') == 'Error'
