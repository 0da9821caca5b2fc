"""Exception hierarchy for stylebuild.

This module defines the exception classes raised by the build pipeline:
- StyleBuildError: Base exception for all stylebuild errors
- CompileError: A source stylesheet failed to compile
- MinifyError: Compiled CSS could not be minified
- OutputWriteError: A compiled file could not be persisted
- WatchSetupError: The watched directory is missing
- ConfigurationError: The build configuration is invalid

User-facing messages are safe to display. Technical details passed as
``internal_details`` are logged via structlog and never shown to the user.
"""

from __future__ import annotations

import structlog

logger = structlog.get_logger(__name__)


class StyleBuildError(Exception):
    """Base exception for stylebuild.

    Args:
        user_message: Message safe to display to the user.
        internal_details: Optional technical details, logged but not displayed.

    Example:
        >>> raise StyleBuildError(
        ...     "Build failed",
        ...     internal_details="libsass returned an empty result",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.error(
                "stylebuild_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class FileStageError(StyleBuildError):
    """Base for errors tied to a single source file.

    Attributes:
        file: Path of the source file being processed.
        message: Message reported by the failing stage.
    """

    action = "process"

    def __init__(
        self,
        file: str,
        message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(
            f"Failed to {self.action} {file}: {message}",
            internal_details=internal_details,
        )
        self.file = file
        self.message = message


class CompileError(FileStageError):
    """Raised when a source stylesheet cannot be compiled.

    Example:
        >>> raise CompileError("src/scss/main.scss", "Invalid CSS after \\"a {\\"")
    """

    action = "compile"


class MinifyError(FileStageError):
    """Raised when compiled CSS cannot be minified.

    A compiled stylesheet should always minify, so this indicates an
    internal-consistency fault rather than a problem in the source.
    """

    action = "minify"


class OutputWriteError(FileStageError):
    """Raised when a minified stylesheet cannot be written to disk."""

    action = "write output for"


class WatchSetupError(StyleBuildError):
    """Raised when the watch target does not exist.

    Attributes:
        path: Directory that was expected to be watched.
    """

    def __init__(self, path: str) -> None:
        super().__init__(f"Cannot watch {path}: directory does not exist")
        self.path = path


class ConfigurationError(StyleBuildError):
    """Raised when a configuration file cannot be loaded.

    Attributes:
        file_path: Path to the configuration file (if known).
    """

    def __init__(
        self,
        user_message: str,
        *,
        file_path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        full_message = f"{user_message} (in {file_path})" if file_path else user_message
        super().__init__(full_message, internal_details=internal_details)
        self.file_path = file_path
