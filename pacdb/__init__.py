"""
pacdb - Reader for pacman sync databases

Loads the compressed *.db archives found in /var/lib/pacman/sync and
exposes the per-package desc metadata:
- zstd or gzip compressed archives, detected by trying both
- Lookup by exact package name
- Listing and JSON export from the command line
"""

__version__ = "0.1.0"
__author__ = "pacdb contributors"
