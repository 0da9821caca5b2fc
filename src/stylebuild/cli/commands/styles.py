"""stylebuild styles command - Build stylesheets once."""

from __future__ import annotations

import click

from stylebuild.cli.options import build_options, resolve_config
from stylebuild.cli.output import print_written_files, success, warning


@click.command()
@build_options
def styles(
    config_path: str | None,
    source_glob: str | None,
    dest_dir: str | None,
    include_paths: tuple[str, ...],
) -> None:
    """Compile and minify stylesheets.

    Every file matched by the source glob is compiled to CSS, minified
    and written to the output directory as `<name>.css`. The build stops
    at the first broken stylesheet.

    Examples:

        stylebuild styles

        stylebuild styles --source "scss/*.scss" --dest public/css

        stylebuild styles --include-path node_modules
    """
    config = resolve_config(config_path, source_glob, dest_dir, include_paths)

    # Import here to keep --help fast
    from stylebuild.cli.errors import handle_build_error
    from stylebuild.errors import StyleBuildError
    from stylebuild.task import StyleBuildTask

    task = StyleBuildTask.from_config(config)
    try:
        written = task.run_config(config)
    except StyleBuildError as e:
        handle_build_error(e)

    if not written:
        warning(f"No stylesheets match {config.source_glob}")
        return

    print_written_files(written)
    noun = "stylesheet" if len(written) == 1 else "stylesheets"
    success(f"Built {len(written)} {noun} into {config.dest_dir}")
