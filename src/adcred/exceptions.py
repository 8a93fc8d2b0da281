"""Exception hierarchy for adcred.

All exceptions inherit from :class:`AdcError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`adcred.exit_codes`.
The command-line entry point in :func:`adcred.app.main` catches
``AdcError`` and exits with the appropriate code; library callers catch
the specific subclass they care about.

Subclass hierarchy::

    AdcError (exit 1)
    +-- ConfigError                     (exit 1)
    +-- TokenUnavailableError           (exit 1)
    +-- InvalidArgumentError            (exit 2)
    |   +-- MalformedCredentialsError
    |   +-- MissingFieldError
    |   +-- UnsupportedCredentialTypeError
    +-- DefaultCredentialsError         (exit 3)
    +-- CredentialsNotFoundError        (exit 4)
    +-- CredentialsReadError            (exit 5)

:class:`MetadataProbeError` is not part of the hierarchy:
it never reaches callers because the platform probe absorbs it.
"""

from __future__ import annotations

from typing import Optional

from adcred.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_ARGUMENT,
    EXIT_NO_CREDENTIALS,
    EXIT_NOT_FOUND,
    EXIT_READ_FAILURE,
)


class AdcError(Exception):
    """Base exception for all adcred errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`adcred.exit_codes`.

    Args:
        message: Human-readable error description. When a file path was
            involved the message always contains it.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(AdcError):
    """Raised when a settings environment variable holds an invalid value."""

    exit_code = EXIT_GENERIC_FAILURE


class TokenUnavailableError(AdcError):
    """Raised when an authorization header is requested before a token was attached."""

    exit_code = EXIT_GENERIC_FAILURE


class InvalidArgumentError(AdcError):
    """Raised when credentials contents are structurally or semantically invalid."""

    exit_code = EXIT_INVALID_ARGUMENT


class MalformedCredentialsError(InvalidArgumentError):
    """Raised when credentials contents are not a JSON object."""


class MissingFieldError(InvalidArgumentError):
    """Raised when a required credentials field is absent or empty.

    Args:
        message: Human-readable error description.
        field: Name of the offending field.
    """

    def __init__(self, message: str, field: str):
        super().__init__(message)
        self.field = field


class UnsupportedCredentialTypeError(InvalidArgumentError):
    """Raised when the ``type`` field names a kind the caller cannot use.

    Args:
        raw_type: The raw ``type`` value found in the document (empty when
            absent).
        label: Description of where the contents came from, e.g.
            ``"credentials file /tmp/key.json"``.
    """

    def __init__(self, raw_type: str, label: str):
        super().__init__(
            f"Unsupported credential type ({raw_type}) when reading {label}."
        )
        self.raw_type = raw_type


class DefaultCredentialsError(AdcError):
    """Raised when no step of the discovery chain produced credentials."""

    exit_code = EXIT_NO_CREDENTIALS


class CredentialsNotFoundError(AdcError):
    """Raised when a credentials file cannot be opened.

    Whether this is fatal depends on where the path came from: the
    resolver lets it fall through for the well-known gcloud path only.

    Args:
        path: The path that could not be opened.
    """

    exit_code = EXIT_NOT_FOUND

    def __init__(self, path: str):
        super().__init__(f"Cannot open credentials file {path}.")
        self.path = path


class CredentialsReadError(AdcError):
    """Raised when a credentials file exists but reading it fails."""

    exit_code = EXIT_READ_FAILURE

    def __init__(self, path: str, reason: Optional[str] = None):
        message = f"Error reading credentials file {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.path = path


class MetadataProbeError(Exception):
    """Raised by the metadata-server ping when the probe is inconclusive."""
