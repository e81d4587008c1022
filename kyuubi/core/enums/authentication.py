"""
Authentication-related enums for the Kyuubi system.
"""

from enum import Enum


class AuthTypes(Enum):
    """Client authentication types accepted by the frontend service."""
    NOSASL = "NOSASL"
    NONE = "NONE"
    LDAP = "LDAP"
    KERBEROS = "KERBEROS"

    def __str__(self):
        return self.name


class SaslQOP(Enum):
    """SASL quality of protection levels."""
    AUTH = "auth"
    AUTH_INT = "auth-int"
    AUTH_CONF = "auth-conf"

    def __str__(self):
        return self.value
