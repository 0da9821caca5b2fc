"""CLI error handling for stylebuild.

Wraps stylebuild exceptions in user-friendly messages with
appropriate exit codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import click
from pydantic import ValidationError as PydanticValidationError

from stylebuild.cli.output import error
from stylebuild.errors import (
    CompileError,
    ConfigurationError,
    StyleBuildError,
    WatchSetupError,
)

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails


EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # Broken stylesheet or configuration
EXIT_SYSTEM_ERROR = 2  # Missing files, write failures, internal faults


class CLIError(click.ClickException):
    """CLI-specific exception with exit code support.

    Attributes:
        message: User-facing error message.
        exit_code: Exit code for the CLI (default: 1).
    """

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        """Display the error message using Rich formatting.

        Args:
            file: Output file (unused, for Click compatibility).
        """
        error(self.format_message())


def format_pydantic_error(err: PydanticValidationError) -> str:
    """Format Pydantic validation error into user-friendly message.

    Example:
        >>> format_pydantic_error(err)
        "Validation failed:\\n  - dest_dir: String should have at least 1 character"
    """
    errors: list[ErrorDetails] = err.errors()
    lines = ["Validation failed:"]

    for e in errors:
        loc = ".".join(str(x) for x in e["loc"])
        lines.append(f"  - {loc}: {e['msg']}")

    return "\n".join(lines)


def exit_code_for(err: StyleBuildError) -> int:
    """Map a stylebuild exception to a CLI exit code.

    Compile and configuration errors are the user's to fix; minify, write
    and watch setup failures are environment or internal faults.
    """
    if isinstance(err, (CompileError, ConfigurationError)):
        return EXIT_USER_ERROR
    return EXIT_SYSTEM_ERROR


def handle_build_error(err: StyleBuildError) -> NoReturn:
    """Convert a stylebuild exception into a CLIError.

    Raises:
        CLIError: Always.
    """
    message = err.user_message
    if isinstance(err, WatchSetupError):
        message = f"{message}\n\nCheck --source or source_glob in stylebuild.yaml."
    raise CLIError(message, exit_code=exit_code_for(err)) from err


def handle_validation_error(err: PydanticValidationError, file_path: str) -> NoReturn:
    """Handle configuration validation errors.

    Raises:
        CLIError: Always raises with formatted error message.
    """
    raise CLIError(f"Invalid configuration in {file_path}:\n{format_pydantic_error(err)}")


def handle_file_not_found(file_path: str) -> NoReturn:
    """Handle a missing configuration file.

    Raises:
        CLIError: Always raises with formatted error message.
    """
    raise CLIError(
        f"File not found: {file_path}\n\n"
        "Omit --config to use stylebuild.yaml from the current directory or the defaults.",
        exit_code=EXIT_SYSTEM_ERROR,
    )
