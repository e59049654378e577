"""
Unified error handling for mkrdash CLI commands.

Core modules raise the structured errors defined here; only the CLI
boundary turns them into process exit codes.

Exit Codes:
- 0: Success
- 10: Configuration error (dashboard YAML, CLI input, settings)
- 11: Provider error (Mackerel API failure)
- 13: Local I/O error (artifact could not be written)
- 127: Unknown/internal error
"""

from __future__ import annotations

import functools
import sys
import traceback
from enum import IntEnum
from typing import Any, Callable, TypeVar

import structlog

logger = structlog.get_logger()


class ExitCode(IntEnum):
    """Standardized exit codes for CLI commands."""

    SUCCESS = 0
    CONFIG_ERROR = 10
    PROVIDER_ERROR = 11
    LOCAL_IO_ERROR = 13
    UNKNOWN_ERROR = 127


class MkrError(Exception):
    """Base exception for mkrdash errors with exit code support."""

    exit_code: ExitCode = ExitCode.UNKNOWN_ERROR
    show_traceback: bool = False

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(MkrError):
    """Raised for malformed or incomplete configuration."""

    exit_code = ExitCode.CONFIG_ERROR


class ProviderError(MkrError):
    """Raised when the Mackerel API (or another remote collaborator) fails."""

    exit_code = ExitCode.PROVIDER_ERROR


class LocalIOError(MkrError):
    """Raised when a local artifact cannot be created or written."""

    exit_code = ExitCode.LOCAL_IO_ERROR


class MigrationError(ProviderError):
    """Raised when a migrated dashboard could not be created after the delete."""


# Type variable for decorated functions
F = TypeVar("F", bound=Callable[..., int])


def main_with_error_handling(
    *,
    show_traceback: bool = False,
    log_errors: bool = True,
) -> Callable[[F], F]:
    """
    Decorator for CLI command functions that provides unified error handling.

    Catches exceptions, reports them on stderr and converts them to
    exit codes.

    Args:
        show_traceback: If True, show full traceback for unexpected errors
        log_errors: If True, log errors to structlog

    Usage:
        @main_with_error_handling()
        def my_command() -> int:
            # command implementation
            return 0

    Exit codes:
        - MkrError subclasses: Uses the error's exit_code
        - KeyboardInterrupt: Returns 130 (standard for SIGINT)
        - Other exceptions: Returns 127 (unknown error)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> int:
            from mkrdash.cli.ux import error as print_error

            try:
                return func(*args, **kwargs)
            except MkrError as e:
                if log_errors:
                    logger.debug(
                        "command_error",
                        error_type=type(e).__name__,
                        message=e.message,
                        exit_code=int(e.exit_code),
                        **e.details,
                    )
                print_error(format_error_message(e))
                if e.show_traceback or show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return e.exit_code
            except KeyboardInterrupt:
                if log_errors:
                    logger.info("command_interrupted")
                return 130  # Standard exit code for SIGINT
            except Exception as e:
                if log_errors:
                    logger.error(
                        "unexpected_error",
                        error_type=type(e).__name__,
                        message=str(e),
                        exit_code=int(ExitCode.UNKNOWN_ERROR),
                    )
                print_error(f"Unexpected error: {e}")
                if show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return ExitCode.UNKNOWN_ERROR

        return wrapper  # type: ignore[return-value]

    return decorator


def format_error_message(error: MkrError) -> str:
    """Format an error message for display to users."""
    msg = error.message
    if error.details:
        detail_str = ", ".join(f"{k}={v}" for k, v in error.details.items())
        msg = f"{msg} ({detail_str})"
    return msg
