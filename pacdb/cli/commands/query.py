"""Package query commands (info, list, dump)."""

from pathlib import Path
from typing import List

from ..display import DisplayMode


def cmd_info(args, paths: List[Path]) -> int:
    """Handle info command: show the metadata of one package.

    Databases are searched in order, the first one having the package
    wins. With -k only the requested fields are shown, in JSON mode too.
    """
    from .. import colors, display
    from ...core.repos import find_package

    found = find_package(paths, args.package)
    if found is None:
        print(colors.warning("Package not found"))
        return 1

    database, package = found

    if display.get_mode() == DisplayMode.JSON:
        data = package.to_dict()
        if args.keys:
            wanted = [key.lower() for key in args.keys]
            data['metadata'] = {key: values for key, values in data['metadata'].items()
                                if key in wanted}
        data['database'] = str(database.file)
        print(display.format_json(data))
        return 0

    if args.keys:
        # Raw value lines of the requested fields, nothing else
        for key in args.keys:
            for line in package.get(key, ()):
                print(line)
        return 0

    print(f"Found package {colors.pkg_name(package.name)} "
          f"in db {colors.db_name(str(database.file))}")
    display.print_lines(display.format_metadata(package.metadata, key_func=colors.field_key))
    return 0


def cmd_list(args, paths: List[Path]) -> int:
    """Handle list command: package names of every database."""
    from .. import colors, display
    from ...core.database import open_database

    if display.get_mode() == DisplayMode.JSON:
        listing = {}
        for path in paths:
            database = open_database(path)
            listing[database.file.name] = list(database)
        print(display.format_json(listing))
        return 0

    for path in paths:
        database = open_database(path)
        if display.get_mode() == DisplayMode.FLAT:
            display.print_lines(list(database))
            continue
        print(f"database: {colors.db_name(database.file.name)} "
              f"{colors.note(f'({len(database)} packages)')}")
        display.print_lines(display.format_package_list(list(database)))
    return 0


def cmd_dump(args, paths: List[Path]) -> int:
    """Handle dump command: every database as JSON."""
    from .. import display
    from ...core.database import open_database

    print(display.format_json([open_database(path).to_dict() for path in paths]))
    return 0
