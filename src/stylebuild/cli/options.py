"""Options shared by the build commands."""

from __future__ import annotations

from typing import Any, Callable, TypeVar

import click
from pydantic import ValidationError as PydanticValidationError

from stylebuild.cli.errors import handle_build_error, handle_file_not_found, handle_validation_error
from stylebuild.config import CONFIG_FILENAME, BuildConfig, load_config
from stylebuild.errors import ConfigurationError

F = TypeVar("F", bound=Callable[..., Any])


def build_options(func: F) -> F:
    """Attach --config, --source, --dest and --include-path to a command."""
    decorators = [
        click.option(
            "-c",
            "--config",
            "config_path",
            type=click.Path(dir_okay=False),
            default=None,
            help=f"Path to config file [default: ./{CONFIG_FILENAME} if present]",
        ),
        click.option(
            "-s",
            "--source",
            "source_glob",
            type=str,
            default=None,
            help="Glob selecting source stylesheets [default: src/scss/*.scss]",
        ),
        click.option(
            "-d",
            "--dest",
            "dest_dir",
            type=click.Path(file_okay=False),
            default=None,
            help="Output directory [default: assets/css]",
        ),
        click.option(
            "-I",
            "--include-path",
            "include_paths",
            multiple=True,
            help="Extra directory searched by @import (repeatable)",
        ),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def resolve_config(
    config_path: str | None,
    source_glob: str | None,
    dest_dir: str | None,
    include_paths: tuple[str, ...],
) -> BuildConfig:
    """Load the configuration file and apply command-line overrides.

    Raises:
        CLIError: If the file is missing or invalid.
    """
    try:
        config = load_config(config_path)
        return config.merged(
            source_glob=source_glob,
            dest_dir=dest_dir,
            include_paths=list(include_paths) or None,
        )
    except FileNotFoundError:
        handle_file_not_found(str(config_path))
    except PydanticValidationError as e:
        handle_validation_error(e, config_path or CONFIG_FILENAME)
    except ConfigurationError as e:
        handle_build_error(e)
