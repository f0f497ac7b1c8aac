"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .logging_config import configure_logging, get_logger
from .json import stable_json_dumps, JSONEncodeError
from .hash import Algorithm, hash_string
from .cache import LRUCache, Record, Stats
from .paths import MISSING, get_path, set_path, delete_path, restore_path


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Logging
    "configure_logging",
    "get_logger",
    # JSON
    "stable_json_dumps",
    "JSONEncodeError",
    # Hashing
    "Algorithm",
    "hash_string",
    # Caching
    "LRUCache",
    "Record",
    "Stats",
    # Property paths
    "MISSING",
    "get_path",
    "set_path",
    "delete_path",
    "restore_path",
]
