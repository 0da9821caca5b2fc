"""Build configuration for stylebuild.

Configuration is resolved in three layers: built-in defaults, an optional
``stylebuild.yaml`` file, and command-line overrides.

Example stylebuild.yaml:

    source_glob: src/scss/*.scss
    dest_dir: assets/css
    include_paths:
      - node_modules
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
import yaml

from stylebuild.errors import ConfigurationError

DEFAULT_SOURCE_GLOB = "src/scss/*.scss"
DEFAULT_DEST_DIR = "assets/css"
CONFIG_FILENAME = "stylebuild.yaml"


class BuildConfig(BaseModel):
    """Settings for a style build.

    Relative paths are resolved against the project root (the working
    directory), not the directory holding the config file.

    Attributes:
        source_glob: Glob selecting the source stylesheets, relative to the
            project root unless absolute.
        dest_dir: Directory receiving the minified CSS files.
        include_paths: Extra directories searched by ``@import``.

    Example:
        >>> config = BuildConfig()
        >>> config.source_glob
        'src/scss/*.scss'
        >>> config.merged(dest_dir="public/css").dest_dir
        'public/css'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source_glob: str = Field(
        default=DEFAULT_SOURCE_GLOB,
        min_length=1,
        description="Glob selecting the source stylesheets",
    )
    dest_dir: str = Field(
        default=DEFAULT_DEST_DIR,
        min_length=1,
        description="Directory receiving the minified CSS files",
    )
    include_paths: list[str] = Field(
        default_factory=list,
        description="Extra directories searched when resolving @import",
    )

    @classmethod
    def from_yaml(cls, path: str | Path) -> BuildConfig:
        """Load and validate a BuildConfig from a YAML file.

        An empty file yields the default configuration.

        Args:
            path: Path to the YAML file.

        Returns:
            Validated BuildConfig instance.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ConfigurationError: If the file is unreadable, not UTF-8, or its
                YAML is malformed or not a mapping.
            pydantic.ValidationError: If schema validation fails.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            with path.open("r", encoding="utf-8") as f:
                data: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                "Invalid YAML",
                file_path=str(path),
                internal_details=str(e),
            ) from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(
                "Cannot read configuration file",
                file_path=str(path),
                internal_details=str(e),
            ) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration must be a mapping", file_path=str(path))

        return cls.model_validate(data)

    def merged(self, **overrides: Any) -> BuildConfig:
        """Return a copy with every non-None override applied.

        Args:
            **overrides: Field values; None values are ignored.

        Returns:
            New BuildConfig instance.
        """
        update = {k: v for k, v in overrides.items() if v is not None}
        if not update:
            return self
        return self.model_validate({**self.model_dump(), **update})


def load_config(path: str | Path | None = None, root: Path | None = None) -> BuildConfig:
    """Resolve the build configuration.

    Args:
        path: Explicit config file. Must exist when given.
        root: Directory searched for ``stylebuild.yaml`` when no path is given.

    Returns:
        The configuration from the file, or defaults if none is present.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
        ConfigurationError: If the file is malformed.
        pydantic.ValidationError: If the file fails validation.
    """
    if path is not None:
        return BuildConfig.from_yaml(path)

    candidate = (root or Path.cwd()) / CONFIG_FILENAME
    if candidate.exists():
        return BuildConfig.from_yaml(candidate)
    return BuildConfig()


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_DEST_DIR",
    "DEFAULT_SOURCE_GLOB",
    "BuildConfig",
    "load_config",
]
