"""
Exception classes for the OBS translation updater.

Every component raises one of these and lets it propagate; the entry point in
``main`` is the only place that catches them.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum


class ErrorSeverity(Enum):
    """Error severity levels for classification and reporting."""

    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Categories of errors raised during an update run."""

    COMMAND = "command"
    API = "api"
    ARCHIVE = "archive"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


class UpdaterError(Exception):
    """Base exception class for translation updater errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.HIGH,
        context: object | None = None,
    ) -> None:
        super().__init__(message)
        self.category: ErrorCategory = category
        self.severity: ErrorSeverity = severity
        self.context: object | None = context


class CommandError(UpdaterError):
    """An external command (git) exited with a non-zero status or could not start."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int | None,
        stderr: str = "",
    ) -> None:
        rendered = " ".join(command)
        if returncode is None:
            message = f"Could not run '{rendered}': {stderr}"
        else:
            message = f"Command '{rendered}' failed with exit code {returncode}"
            if stderr.strip():
                message = f"{message}: {stderr.strip()}"
        super().__init__(
            message,
            category=ErrorCategory.COMMAND,
            severity=ErrorSeverity.CRITICAL,
            context=rendered,
        )
        self.command: tuple[str, ...] = tuple(command)
        self.returncode: int | None = returncode
        self.stderr: str = stderr


class CrowdinAPIError(UpdaterError):
    """Crowdin API request failed."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.API,
            severity=ErrorSeverity.HIGH,
            context=context,
        )
        self.status_code: int | None = status_code


class ArchiveError(UpdaterError):
    """The downloaded translation archive could not be read."""

    def __init__(self, message: str, context: object | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.ARCHIVE,
            severity=ErrorSeverity.HIGH,
            context=context,
        )


class ConfigurationError(UpdaterError):
    """Configuration-related errors."""

    def __init__(self, message: str, context: object | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.CRITICAL,
            context=context,
        )
