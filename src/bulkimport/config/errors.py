"""Errors raised while reading bulk import settings."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when a bulk import setting cannot be used."""

    def __init__(self, name: str, message: str) -> None:
        self.name = name
        super().__init__(f"{name}: {message}")


class MissingConfigurationError(ConfigurationError):
    """Raised when a setting is present in the environment but blank."""

    def __init__(self, name: str) -> None:
        super().__init__(name, "set but blank; unset it to use the default")


class InvalidConfigurationError(ConfigurationError):
    """Raised when a setting does not hold an accepted value."""

    def __init__(self, name: str, value: str, reason: str) -> None:
        self.value = value
        super().__init__(name, f"invalid value {value!r} ({reason})")
