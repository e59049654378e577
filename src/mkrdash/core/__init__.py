"""Core modules for mkrdash - centralized definitions and utilities."""

from mkrdash.core.errors import (
    ConfigurationError,
    ExitCode,
    LocalIOError,
    MigrationError,
    MkrError,
    ProviderError,
    format_error_message,
    main_with_error_handling,
)

__all__ = [
    "ExitCode",
    "MkrError",
    "ConfigurationError",
    "ProviderError",
    "LocalIOError",
    "MigrationError",
    "main_with_error_handling",
    "format_error_message",
]
