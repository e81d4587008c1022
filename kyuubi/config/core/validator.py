"""
Value validators for configuration entries.

A validator pairs a predicate over a parsed value with the message reported
when the predicate rejects the value.
"""

from typing import Any, Callable, Iterable, Optional


class Validator:
    """Predicate over a parsed config value, with a human-readable failure message."""

    def __init__(self, predicate: Callable[[Any], bool], message: str):
        self.predicate = predicate
        self.message = message

    def is_valid(self, value: Any) -> bool:
        return bool(self.predicate(value))

    def failure_message(self, key: str, value: Any) -> str:
        """Message reported when `value` of `key` is rejected."""
        return f"'{value}' in {key} is invalid. {self.message}"

    def __repr__(self):
        return f"{type(self).__name__}({self.message!r})"


class ValuesValidator(Validator):
    """Accepts only values contained in a fixed set."""

    def __init__(self, valid_values: Iterable[Any]):
        self.valid_values = frozenset(valid_values)
        super().__init__(
            lambda value: value in self.valid_values,
            ", ".join(sorted(str(v) for v in self.valid_values))
        )

    def failure_message(self, key: str, value: Any) -> str:
        return f"The value of {key} should be one of {self.message}, but was {value}"


def first_failure(validators: Iterable[Validator], key: str, value: Any) -> Optional[str]:
    """
    Run validators in declaration order.

    Returns:
        The failure message of the first rejecting validator, or None if all pass
    """
    for validator in validators:
        if not validator.is_valid(value):
            return validator.failure_message(key, value)
    return None
