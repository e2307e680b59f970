"""
Central configuration for pacdb paths.

Resolution order for the sync directory:
    1. Explicit override (--db-dir on the command line)
    2. sync_dir= in ~/.pacdb.local
    3. /var/lib/pacman/sync

.pacdb.local format (optional, one setting per line):
    sync_dir=/path/to/sync
    # Comments start with #
"""

import logging
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

# Config file name (looked up in the user's home directory)
LOCAL_CONFIG_FILE = ".pacdb.local"

# Where pacman keeps the downloaded sync databases
DEFAULT_SYNC_DIR = Path("/var/lib/pacman/sync")

# Sync database file suffix (core.db, extra.db, ...)
DB_SUFFIX = ".db"

# Cache for the parsed config file (avoid re-reading it)
_cached_config: Optional[dict] = None


def get_config_path() -> Path:
    """Return the location of the local config file."""
    return Path.home() / LOCAL_CONFIG_FILE


def read_local_config(config_path: Path) -> Optional[dict]:
    """Read a key=value config file.

    Returns:
        Dict with config values, or None if the file doesn't exist
        or cannot be read
    """
    if not config_path.exists():
        return None

    config = {}
    try:
        with open(config_path) as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith('#'):
                    continue
                if '=' in line:
                    key, value = line.split('=', 1)
                    config[key.strip()] = value.strip()
    except OSError as e:
        logger.warning(f"Cannot read {config_path}: {e}")
        return None

    return config


def _load_config() -> dict:
    global _cached_config
    if _cached_config is None:
        _cached_config = read_local_config(get_config_path()) or {}
    return _cached_config


def reset_cache():
    """Forget the cached config file contents."""
    global _cached_config
    _cached_config = None


def get_sync_dir(override: Optional[Union[str, Path]] = None) -> Path:
    """Get the directory holding the sync databases.

    Args:
        override: Directory to use instead of the configured one
    """
    if override:
        return Path(override).expanduser()
    config = _load_config()
    if 'sync_dir' in config:
        return Path(config['sync_dir']).expanduser()
    return DEFAULT_SYNC_DIR
