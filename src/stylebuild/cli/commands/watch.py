"""stylebuild watch command - Rebuild stylesheets on change."""

from __future__ import annotations

import signal
import threading

import click

from stylebuild.cli.options import build_options, resolve_config
from stylebuild.cli.output import error, info, success


@click.command()
@build_options
@click.option(
    "--skip-initial-build",
    is_flag=True,
    default=False,
    help="Start watching without building first.",
)
def watch(
    config_path: str | None,
    source_glob: str | None,
    dest_dir: str | None,
    include_paths: tuple[str, ...],
    skip_initial_build: bool,
) -> None:
    """Build stylesheets, then rebuild whenever a source changes.

    Runs until interrupted. A broken stylesheet is reported and the
    watcher keeps running; save a fix to rebuild.

    Examples:

        stylebuild watch

        stylebuild watch --skip-initial-build
    """
    config = resolve_config(config_path, source_glob, dest_dir, include_paths)

    # Import here to keep --help fast
    from stylebuild.cli.errors import handle_build_error
    from stylebuild.errors import StyleBuildError, WatchSetupError
    from stylebuild.task import StyleBuildTask
    from stylebuild.watch import WatchTrigger

    task = StyleBuildTask.from_config(config)

    def rebuild() -> None:
        try:
            written = task.run_config(config)
        except StyleBuildError as e:
            error(e.user_message)
            raise
        success(f"Built {len(written)} stylesheet(s)")

    trigger = WatchTrigger(config.source_glob, rebuild)
    try:
        trigger.start()
    except WatchSetupError as e:
        handle_build_error(e)

    if not skip_initial_build:
        try:
            rebuild()
        except StyleBuildError:
            pass  # reported by rebuild(); keep watching

    previous_handler = None
    if threading.current_thread() is threading.main_thread():
        previous_handler = signal.signal(signal.SIGTERM, lambda signum, frame: trigger.stop())

    info(f"Watching {config.source_glob} (Ctrl+C to stop)")
    try:
        trigger.run_forever()
    finally:
        trigger.stop()
        if previous_handler is not None:
            signal.signal(signal.SIGTERM, previous_handler)
    info("Stopped watching")
