"""Custom exception hierarchy for pywtvehicles."""

from __future__ import annotations


class WtError(Exception):
    """Base exception for all pywtvehicles errors."""


class WtConfigError(WtError):
    """Invalid or missing configuration."""


class WtValidationError(WtError):
    """A request argument failed validation (e.g. a malformed version string).

    Raised before any storage read takes place.
    """

    def __init__(self, message: str, *, value: object = None) -> None:
        self.value = value
        super().__init__(message)


class WtNotFoundError(WtError):
    """Well-formed request, but no matching identifier/version exists."""

    def __init__(
        self,
        message: str,
        *,
        identifier: str = "",
        version: str | None = None,
    ) -> None:
        self.identifier = identifier
        self.version = version
        super().__init__(message)


class WtStorageError(WtError):
    """The underlying snapshot store failed to read or append.

    The catalog core never retries these; they propagate unchanged to the
    caller, which owns any retry policy.
    """

    def __init__(self, message: str, *, operation: str = "") -> None:
        self.operation = operation
        super().__init__(message)
