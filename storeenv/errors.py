"""Custom exceptions for the store environment loader."""

from typing import Optional


class ConfigError(Exception):
    """Base exception for all configuration load errors."""

    def __init__(self, env_var: str, raw_value: Optional[str], reason: str):
        self.env_var = env_var
        self.raw_value = raw_value
        self.reason = reason
        if raw_value is None:
            message = f"{env_var} (unset): {reason}"
        else:
            message = f"{env_var}={raw_value!r}: {reason}"
        super().__init__(message)


class MissingRequiredError(ConfigError):
    """A required variable is absent and has no default."""

    def __init__(self, env_var: str):
        super().__init__(env_var, None, "variable is required but not set")


class MalformedValueError(ConfigError):
    """Raw value cannot be parsed as the field's base type."""

    pass


class OutOfRangeError(ConfigError):
    """Raw value parses but violates the field's range constraint."""

    pass
