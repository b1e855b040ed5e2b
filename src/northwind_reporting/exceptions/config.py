"""Configuration exceptions: settings files, environment, credentials."""

from typing import Any

from .base import NorthwindReportingError


class ConfigurationError(NorthwindReportingError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class InvalidConfigurationError(InvalidConfigError):
    """Raised when a service credential such as an access key is blank."""

    def __init__(self, key: str, reason: str = "must not be empty or blank"):
        # The value is a secret; never echo it back.
        super().__init__(key, "<redacted>", reason)
