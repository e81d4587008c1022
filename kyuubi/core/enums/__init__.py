"""
Core enums for the Kyuubi system.
"""

# Authentication enums
from .authentication import (
    AuthTypes,
    SaslQOP
)

__all__ = [
    # Authentication enums
    'AuthTypes',
    'SaslQOP'
]
