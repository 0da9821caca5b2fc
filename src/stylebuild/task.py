"""StyleBuildTask - compile, minify and write a set of stylesheets.

Example:
    >>> task = StyleBuildTask(root=Path("themes/default"))
    >>> written = task.run("src/scss/*.scss", "assets/css")
    >>> [w.output.name for w in written]
    ['main.css', 'print.css']
"""

from __future__ import annotations

import glob
import os
from pathlib import Path
import tempfile
from typing import Sequence

from stylebuild.config import BuildConfig
from stylebuild.errors import OutputWriteError
from stylebuild.models import CompiledAsset, WrittenFile
from stylebuild.observability import build_step, get_logger
from stylebuild.pipeline import Stage, default_stages, run_stages

PARTIAL_PREFIX = "_"


def discover_sources(source_glob: str, root: Path | None = None) -> list[Path]:
    """Enumerate the SourceFileSet for a glob.

    Directories and SASS partials (``_name.scss``) are excluded. The
    result is sorted so builds are deterministic.

    Args:
        source_glob: Glob pattern, relative to root unless absolute.
        root: Base directory for relative patterns (default: cwd).

    Returns:
        Sorted list of matching source files.
    """
    pattern = Path(source_glob)
    if not pattern.is_absolute():
        pattern = (root or Path.cwd()) / pattern

    matches = (Path(p) for p in glob.glob(str(pattern), recursive=True))
    return sorted(p for p in matches if p.is_file() and not p.name.startswith(PARTIAL_PREFIX))


def write_asset(asset: CompiledAsset, dest_dir: Path) -> WrittenFile:
    """Persist one asset, replacing any previous output atomically.

    Args:
        asset: Minified asset to write.
        dest_dir: Existing output directory.

    Returns:
        WrittenFile describing the persisted file.

    Raises:
        OutputWriteError: If the file cannot be written.
    """
    output = dest_dir / asset.output_name
    data = asset.css.encode("utf-8")
    try:
        fd, tmp_name = tempfile.mkstemp(dir=dest_dir, prefix=f".{asset.output_name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, output)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as e:
        raise OutputWriteError(str(asset.source), f"cannot write {output} ({e.strerror or e})") from e

    return WrittenFile(source=asset.source, output=output, size=len(data))


class StyleBuildTask:
    """One-shot build of every stylesheet matched by a glob.

    Files are processed in enumeration order. The first failure aborts the
    build; files written before the failure keep their new content and the
    failing file's output is left untouched. Outputs whose source no longer
    exists are not removed.

    Attributes:
        root: Base directory for relative globs and destinations.
        stages: Ordered transforms applied to each file.
    """

    def __init__(
        self,
        root: Path | None = None,
        stages: Sequence[Stage] | None = None,
        include_paths: Sequence[str] = (),
    ) -> None:
        """Initialize StyleBuildTask.

        Args:
            root: Base directory (default: cwd at call time).
            stages: Custom stage sequence; defaults to compile then minify.
            include_paths: Extra ``@import`` directories for the default
                compile stage, relative to root unless absolute.
        """
        self.root = root
        if stages is None:
            stages = default_stages(self._resolve(p) for p in include_paths)
        self.stages: list[Stage] = list(stages)

    @classmethod
    def from_config(cls, config: BuildConfig, root: Path | None = None) -> StyleBuildTask:
        """Create a task using the include paths of a BuildConfig."""
        return cls(root=root, include_paths=config.include_paths)

    def run(self, source_glob: str, dest_dir: str | Path) -> list[WrittenFile]:
        """Compile, minify and write every matched stylesheet.

        Args:
            source_glob: Glob selecting the source files.
            dest_dir: Output directory, created if absent.

        Returns:
            Written files, in source enumeration order. Empty if nothing
            matched, in which case nothing is created on disk.

        Raises:
            CompileError: If a source fails to compile.
            MinifyError: If compiled CSS fails to minify.
            OutputWriteError: If an output file cannot be written.
        """
        sources = discover_sources(source_glob, self.root)
        dest = self._resolve(dest_dir)

        with build_step("build", source_glob=source_glob, dest_dir=str(dest)) as result:
            written: list[WrittenFile] = []
            if sources:
                try:
                    dest.mkdir(parents=True, exist_ok=True)
                except OSError as e:
                    raise OutputWriteError(str(sources[0]), f"cannot create {dest} ({e})") from e

            for source in sources:
                asset = run_stages(source, self.stages)
                written.append(write_asset(asset, dest))
                get_logger().info("file_written", source=str(source), output=str(written[-1].output))

            result["files"] = len(written)
        return written

    def run_config(self, config: BuildConfig) -> list[WrittenFile]:
        """Run using the glob and destination from a BuildConfig."""
        return self.run(config.source_glob, config.dest_dir)

    def _resolve(self, path: str | Path) -> Path:
        path = Path(path)
        if path.is_absolute():
            return path
        return (self.root or Path.cwd()) / path
