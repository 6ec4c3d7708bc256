"""
Custom exceptions for serverless-testkit.

Every helper raises a subclass of ``ServerlessTestkitError`` so tests can tell
a record that never appeared apart from a store or HTTP call that broke.
"""

from typing import Any


class ServerlessTestkitError(Exception):
    """Base exception for serverless-testkit errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code or "TESTKIT_ERROR"
        self.context = context or {}


class ValidationError(ServerlessTestkitError):
    """Exception for malformed input to a helper."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message, "VALIDATION_ERROR", context)


class ConfigurationError(ServerlessTestkitError):
    """Exception for missing or invalid configuration."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message, "CONFIGURATION_ERROR", context)


class StoreError(ServerlessTestkitError):
    """Exception for failures raised by the backing store."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        table_name: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, "STORE_ERROR", context)
        self.operation = operation
        self.table_name = table_name


class RetriesExhaustedError(ServerlessTestkitError):
    """Exception raised when a poll loop runs out of attempts."""

    def __init__(
        self,
        message: str,
        attempts: int | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, "RETRIES_EXHAUSTED", context)
        self.attempts = attempts


class NotFoundAfterRetries(RetriesExhaustedError):
    """A single record never appeared."""


class NoResultsAfterRetries(RetriesExhaustedError):
    """A query never returned a page with results."""


class HTTPCallError(ServerlessTestkitError):
    """Exception for failed HTTP calls."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, "HTTP_CALL_ERROR", context)
        self.status_code = status_code
