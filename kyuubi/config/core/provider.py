"""
Configuration provider base classes and implementations.

A provider is the read-only, string-keyed lookup an entry resolves against.
"""

import threading
from abc import ABC, abstractmethod
from typing import Mapping, Optional


class ConfigProvider(ABC):
    """
    Abstract base class for configuration providers.

    Defines the interface that all configuration providers must implement.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Get the raw value of `key`, or None if absent."""
        pass


class MapConfigProvider(ConfigProvider):
    """
    Provider reading from a string mapping, optionally under the owner's lock.
    """

    def __init__(self, settings: Mapping[str, str], lock: Optional[threading.RLock] = None):
        self._settings = settings
        self._lock = lock

    def get(self, key: str) -> Optional[str]:
        if self._lock is None:
            return self._settings.get(key)
        with self._lock:
            return self._settings.get(key)
