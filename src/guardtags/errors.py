"""Custom exception hierarchy for guardtags."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .consistency import ConsistencyReport


class GuardTagsError(Exception):
    """Base exception for guardtags failures."""


class ArgumentError(ValueError, GuardTagsError):
    """Tag construction argument errors, naming the offending parameter."""

    def __init__(self, param_name: str, message: str) -> None:
        super().__init__(f"{message} (parameter '{param_name}')")
        self.param_name = param_name


class ArgumentMissingError(ArgumentError):
    """A required argument was not supplied."""


class ArgumentInvalidError(ArgumentError):
    """An argument was supplied but is malformed."""


class TagConflictError(GuardTagsError):
    """Raised when a function is tagged more than once."""


class LibraryLoadError(GuardTagsError):
    """Raised when a library to scan cannot be imported."""


class ConfigError(ValueError, GuardTagsError):
    """Scan configuration validation errors."""


class ConsistencyError(AssertionError, GuardTagsError):
    """Raised by harness helpers when a library's metadata is inconsistent."""

    def __init__(self, message: str, report: ConsistencyReport | None = None) -> None:
        super().__init__(message)
        self.report = report
