"""Exception hierarchy for gapispec.

All exceptions inherit from :class:`GapiError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`gapispec.exit_codes`.
Errors that originate from an HTTP response additionally carry the response
``status_code`` and the decoded ``payload`` exactly as the remote service
sent it.

Subclass hierarchy::

    GapiError (exit 1)
    +-- InvalidUsageError     (exit 2)
    +-- AuthError             (exit 3)
    +-- NotFoundError         (exit 4)
    +-- ServerError           (exit 5)
    +-- ConnectionError_      (exit 6)
    +-- SpecError             (exit 7)
    |   +-- DuplicateMethodError
    +-- RequestError          (exit 1)
    +-- ConfigError           (exit 1)
"""

from __future__ import annotations

from typing import Any

from gapispec.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_SERVER_ERROR,
    EXIT_SPEC_ERROR,
)


class GapiError(Exception):
    """Base exception for all gapispec errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
        status_code: HTTP status of the failed response, if any.
        payload: Decoded body of the failed response, passed through
            unmodified.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(
        self,
        message: str,
        exit_code: int | None = None,
        status_code: int | None = None,
        payload: Any = None,
    ):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code
        self.status_code = status_code
        self.payload = payload


class InvalidUsageError(GapiError):
    """Raised when a generated method cannot make sense of its arguments."""

    exit_code = EXIT_INVALID_USAGE


class AuthError(GapiError):
    """Raised when authorization fails or the API answers 401/403."""

    exit_code = EXIT_AUTH_FAILURE


class NotFoundError(GapiError):
    """Raised when the API returns HTTP 404 (resource not found)."""

    exit_code = EXIT_NOT_FOUND


class ServerError(GapiError):
    """Raised when the API returns an HTTP 5xx server error."""

    exit_code = EXIT_SERVER_ERROR


class ConnectionError_(GapiError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class SpecError(GapiError):
    """Raised when a resource spec is malformed."""

    exit_code = EXIT_SPEC_ERROR


class DuplicateMethodError(SpecError):
    """Raised when a method name is registered twice without ``override=True``."""


class RequestError(GapiError):
    """Raised for 4xx responses that have no more specific class."""

    exit_code = EXIT_GENERIC_FAILURE


class ConfigError(GapiError):
    """Raised for configuration problems (invalid JSON, bad credential sources)."""

    exit_code = EXIT_GENERIC_FAILURE
