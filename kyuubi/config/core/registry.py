"""
Configuration registry for declared configuration entries.

This module provides the catalogue of every declared entry, keyed by name.
Keys are unique: registering an already known key is a programming error.
"""

import threading
from typing import Dict, Iterator, List, Optional

from kyuubi.core.exceptions import DuplicateKeyError
from kyuubi.logger import get_kyuubi_logger
from .entry import ConfigEntry


class ConfigRegistry:
    """
    Central registry of configuration entries.

    Entries are registered once, while declaring modules are imported, and
    read concurrently afterwards.
    """

    def __init__(self, name: str = "kyuubi"):
        self.name = name
        self.logger = get_kyuubi_logger().bind(component="ConfigRegistry", registry=name)
        self._lock = threading.RLock()
        self._entries: Dict[str, ConfigEntry] = {}

    def register(self, entry: ConfigEntry) -> ConfigEntry:
        """
        Register an entry under its key.

        Args:
            entry: The entry to register

        Returns:
            The registered entry

        Raises:
            DuplicateKeyError: If the key is already registered
        """
        with self._lock:
            if entry.key in self._entries:
                self.logger.error("Duplicate config entry", key=entry.key)
                raise DuplicateKeyError(entry.key)
            self._entries[entry.key] = entry

        self.logger.debug("Config entry registered", key=entry.key, type=entry.type_name)
        return entry

    def get(self, key: str) -> Optional[ConfigEntry]:
        """Get the entry registered under `key`."""
        with self._lock:
            return self._entries.get(key)

    def keys(self) -> List[str]:
        with self._lock:
            return sorted(self._entries)

    def entries(self) -> List[ConfigEntry]:
        """List all registered entries, sorted by key."""
        with self._lock:
            return [self._entries[key] for key in sorted(self._entries)]

    def describe(self) -> List[dict]:
        """Key, type, default, doc and version of every entry, sorted by key."""
        return [entry.describe() for entry in self.entries()]

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[ConfigEntry]:
        return iter(self.entries())
