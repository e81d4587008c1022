"""
Base exception classes for the Kyuubi system.
"""


class KyuubiError(Exception):
    """Base exception for all Kyuubi errors."""
    pass


class PreconditionError(KyuubiError, ValueError):
    """Raised when a caller violates a method precondition (e.g. a None argument)."""

    def __init__(self, argument: str, reason: str = None):
        self.argument = argument
        self.reason = reason
        message = f"Precondition failed for argument '{argument}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ConfigurationError(KyuubiError):
    """Base exception for configuration errors."""

    def __init__(self, config_key: str = None, config_value: str = None, reason: str = None):
        self.config_key = config_key
        self.config_value = config_value
        self.reason = reason
        message = "Configuration error"
        if config_key:
            message += f" for '{config_key}'"
        if config_value is not None:
            message += f" with value '{config_value}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)
