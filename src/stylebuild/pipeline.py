"""Transform stages applied to each source stylesheet.

A build runs an ordered sequence of stages over every source file. Each
stage takes a CompiledAsset and returns a new one; a failing stage raises
a FileStageError subclass, which stops the sequence for that file and
aborts the build.

Default sequence:
    SassCompiler -> minify_css
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Sequence

import rcssmin
import sass

from stylebuild.errors import CompileError, MinifyError
from stylebuild.models import CompiledAsset
from stylebuild.observability import get_logger

Stage = Callable[[CompiledAsset], CompiledAsset]

# Output style handed to libsass; minification is a separate stage.
SASS_OUTPUT_STYLE = "expanded"


class SassCompiler:
    """Compile a source stylesheet into CSS with libsass.

    The directory of the source file is searched first when resolving
    ``@import``, followed by the configured include paths.

    Attributes:
        include_paths: Extra directories searched by ``@import``.

    Example:
        >>> compiler = SassCompiler(include_paths=["node_modules"])
        >>> asset = compiler(CompiledAsset.for_source(Path("src/scss/main.scss")))
    """

    def __init__(self, include_paths: Iterable[str | Path] = ()) -> None:
        self.include_paths = [str(p) for p in include_paths]

    def __call__(self, asset: CompiledAsset) -> CompiledAsset:
        source = asset.source
        include_paths = [str(source.parent), *self.include_paths]
        try:
            css = sass.compile(
                filename=str(source),
                include_paths=include_paths,
                output_style=SASS_OUTPUT_STYLE,
            )
        except sass.CompileError as e:
            raise CompileError(str(source), _first_line(str(e)), internal_details=str(e)) from e
        except OSError as e:
            raise CompileError(str(source), f"cannot read source ({e})") from e

        get_logger().debug("file_compiled", source=str(source), size=len(css))
        return asset.with_css(css)


def minify_css(asset: CompiledAsset) -> CompiledAsset:
    """Strip comments and non-semantic whitespace from compiled CSS."""
    try:
        minified = rcssmin.cssmin(asset.css)
    except Exception as e:
        raise MinifyError(str(asset.source), str(e)) from e

    get_logger().debug("file_minified", source=str(asset.source), size=len(minified))
    return asset.with_css(minified)


def default_stages(include_paths: Iterable[str | Path] = ()) -> list[Stage]:
    """Return the standard compile-then-minify sequence."""
    return [SassCompiler(include_paths), minify_css]


def run_stages(source: Path, stages: Sequence[Stage]) -> CompiledAsset:
    """Apply stages in order to one source file.

    Args:
        source: Source stylesheet path.
        stages: Ordered transforms.

    Returns:
        The asset produced by the last stage.

    Raises:
        CompileError: If compilation fails.
        MinifyError: If minification fails.
    """
    asset = CompiledAsset.for_source(source)
    for stage in stages:
        asset = stage(asset)
    return asset


def _first_line(message: str) -> str:
    # libsass errors span several lines with a source excerpt
    for line in message.splitlines():
        if line.strip():
            return line.strip()
    return message
