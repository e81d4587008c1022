"""
Core exceptions for the Kyuubi system.

This module provides all exception classes used throughout the Kyuubi system,
organized by domain and with a clear inheritance hierarchy.
"""

# Base exceptions
from .base import (
    KyuubiError,
    PreconditionError,
    ConfigurationError
)

# Config entry exceptions
from .config import (
    DuplicateKeyError,
    ConfigParseError,
    ConfigValidationError
)

__all__ = [
    # Base exceptions
    'KyuubiError',
    'PreconditionError',
    'ConfigurationError',

    # Config entry exceptions
    'DuplicateKeyError',
    'ConfigParseError',
    'ConfigValidationError'
]
