"""stylebuild: compile SCSS stylesheets into minified CSS.

This package provides:
- StyleBuildTask: one-shot compile, minify and write of a glob of stylesheets
- WatchTrigger: rebuild on source changes
- BuildConfig: validated configuration for stylebuild.yaml
"""

from __future__ import annotations

__version__ = "0.1.0"

from stylebuild.config import (
    DEFAULT_DEST_DIR,
    DEFAULT_SOURCE_GLOB,
    BuildConfig,
    load_config,
)
from stylebuild.errors import (
    CompileError,
    ConfigurationError,
    MinifyError,
    OutputWriteError,
    StyleBuildError,
    WatchSetupError,
)
from stylebuild.models import CompiledAsset, WatchState, WrittenFile
from stylebuild.task import StyleBuildTask, discover_sources
from stylebuild.watch import WatchTrigger, watch

__all__ = [
    "__version__",
    # Build
    "StyleBuildTask",
    "discover_sources",
    "WatchTrigger",
    "watch",
    # Configuration
    "BuildConfig",
    "load_config",
    "DEFAULT_SOURCE_GLOB",
    "DEFAULT_DEST_DIR",
    # Models
    "CompiledAsset",
    "WrittenFile",
    "WatchState",
    # Errors
    "StyleBuildError",
    "CompileError",
    "MinifyError",
    "OutputWriteError",
    "WatchSetupError",
    "ConfigurationError",
]
