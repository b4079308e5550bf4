"""Exception hierarchy for specdoc.

All exceptions inherit from :class:`SpecdocError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`specdoc.exit_codes`.
The top-level error handler in :func:`specdoc.app.main` catches
``SpecdocError`` and exits with the appropriate code.

The document processor itself is fail-soft and does not raise these for
malformed specs; they are raised by the callers around it (loading,
configuration, rendering).

Subclass hierarchy::

    SpecdocError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- SpecParseError      (exit 7)
    +-- RenderError         (exit 8)
    +-- ConfigError         (exit 1)
"""

from specdoc.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_RENDER_ERROR,
    EXIT_SPEC_PARSE_ERROR,
)


class SpecdocError(Exception):
    """Base exception for all specdoc errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SpecdocError):
    """Raised for invalid CLI arguments or unsupported output formats."""

    exit_code = EXIT_INVALID_USAGE


class SpecParseError(SpecdocError):
    """Raised when the OpenAPI spec cannot be read, parsed, or fails validation."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class RenderError(SpecdocError):
    """Raised when a renderer cannot produce or write its output."""

    exit_code = EXIT_RENDER_ERROR


class ConfigError(SpecdocError):
    """Raised for configuration problems (invalid project config, bad option values)."""

    exit_code = EXIT_GENERIC_FAILURE
