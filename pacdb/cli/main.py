"""
Main CLI entry point for pacdb

Commands, with short aliases:
- pacdb info <pkg> / pacdb i     (metadata of one package)
- pacdb list / pacdb ls          (package names per database)
- pacdb dump / pacdb json        (everything as JSON)

Without --db, every *.db file of the sync directory is used.
"""

import argparse
import sys

from .. import __version__


def check_dependencies() -> list:
    """Check for required Python modules.

    Returns:
        List of (module, purpose) tuples for missing modules
    """
    missing = []

    try:
        import zstandard  # noqa: F401
    except ImportError:
        missing.append(('zstandard', 'sync database decompression'))

    return missing


def print_missing_dependencies(missing: list):
    """Print error message for missing dependencies."""
    print("ERROR: Missing required Python modules:\n", file=sys.stderr)
    for module, purpose in missing:
        print(f"  - {module} ({purpose})", file=sys.stderr)
    print("\nInstall with:", file=sys.stderr)
    print(f"  pip install {' '.join(module for module, _ in missing)}", file=sys.stderr)


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with all commands and aliases."""

    parser = argparse.ArgumentParser(
        prog='pacdb',
        description='Query pacman sync databases',
        epilog='Use "pacdb <command> --help" for command-specific help.'
    )

    parser.add_argument(
        '--version', '-V',
        action='version',
        version=f'pacdb {__version__}'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Print debug information on stderr'
    )

    parser.add_argument(
        '--nocolor',
        action='store_true',
        help='Disable colored output'
    )

    parser.add_argument(
        '--db',
        metavar='PATH',
        help='Use this database file only'
    )

    parser.add_argument(
        '--db-dir',
        metavar='DIR',
        help='Directory holding the sync databases (default: /var/lib/pacman/sync)'
    )

    # Parent parser for display options (inherited by subparsers)
    display_parent = argparse.ArgumentParser(add_help=False)
    display_parent.add_argument(
        '--json',
        action='store_true',
        help='JSON output for scripting'
    )
    display_parent.add_argument(
        '--flat',
        action='store_true',
        help='Flat output (one item per line, parsable)'
    )
    display_parent.add_argument(
        '--show-all',
        action='store_true',
        help='Show all items without truncation'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        title='commands',
        metavar='<command>'
    )

    # =========================================================================
    # info / pkg-info / i
    # =========================================================================
    info_parser = subparsers.add_parser(
        'info', aliases=['pkg-info', 'i'],
        help='Print information about a package',
        parents=[display_parent]
    )
    info_parser.add_argument(
        'package',
        help='Exact package name'
    )
    info_parser.add_argument(
        '--key', '-k',
        dest='keys',
        action='append',
        metavar='KEY',
        help='Only print the values of this field (repeatable), e.g. -k depends'
    )

    # =========================================================================
    # list / ls
    # =========================================================================
    subparsers.add_parser(
        'list', aliases=['ls'],
        help='List the packages of each database',
        parents=[display_parent]
    )

    # =========================================================================
    # dump / json
    # =========================================================================
    subparsers.add_parser(
        'dump', aliases=['json'],
        help='Dump all databases as JSON'
    )

    return parser


def format_error(e) -> str:
    """Render a DatabaseError as 'Error: <message> at db <path>'."""
    text = f"Error: {e.message}"
    if e.entry:
        text += f" in entry {e.entry}"
    if e.path:
        text += f" at db {e.path}"
    return text


# =============================================================================
# Main entry point
# =============================================================================

def main(argv=None) -> int:
    """Main CLI entry point."""
    missing = check_dependencies()
    if missing:
        print_missing_dependencies(missing)
        return 1

    parser = create_parser()
    args = parser.parse_args(argv)

    # Configure logging based on verbose flag
    if args.verbose:
        import logging
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(name)s - %(levelname)s - %(message)s',
            stream=sys.stderr
        )

    from . import colors
    colors.init(nocolor=args.nocolor)

    from . import display
    if getattr(args, 'json', False):
        display.init(mode='json', show_all=True)
    elif getattr(args, 'flat', False):
        display.init(mode='flat', show_all=True)
    else:
        display.init(mode='columns', show_all=getattr(args, 'show_all', False))

    if not args.command:
        print("This tool requires a subcommand, call with -h to see options")
        return 1

    from ..core.errors import DatabaseError
    from ..core.repos import resolve_databases
    from .commands import cmd_info, cmd_list, cmd_dump

    try:
        paths = resolve_databases(db=args.db, db_dir=args.db_dir)

        if args.command in ('info', 'pkg-info', 'i'):
            return cmd_info(args, paths)
        elif args.command in ('list', 'ls'):
            return cmd_list(args, paths)
        elif args.command in ('dump', 'json'):
            return cmd_dump(args, paths)
        else:
            print(f"Command '{args.command}' not yet implemented")
            return 1

    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130

    except DatabaseError as e:
        if args.verbose:
            import traceback
            traceback.print_exc()
        print(colors.error(format_error(e)), file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
