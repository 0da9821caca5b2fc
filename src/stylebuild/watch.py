"""WatchTrigger - rebuild stylesheets when their sources change.

The watchdog observer thread only records that something changed; builds
run one at a time on the thread that calls ``run_forever()``. Changes that
arrive while a build is running are coalesced into a single pending
rebuild.

State machine:
    IDLE --file event--> BUILDING --build finished--> IDLE
    any state --stop()--> STOPPED
"""

from __future__ import annotations

import fnmatch
import os
from pathlib import Path
import queue
import re
import threading
from typing import Any, Callable

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from stylebuild.errors import StyleBuildError, WatchSetupError
from stylebuild.models import WatchState
from stylebuild.observability import get_logger

TRIGGER_EVENTS = frozenset(
    {EVENT_TYPE_CREATED, EVENT_TYPE_MODIFIED, EVENT_TYPE_DELETED, EVENT_TYPE_MOVED}
)

# Seconds between checks for stop() while waiting for events.
POLL_INTERVAL = 0.5

_MAGIC = re.compile(r"[*?\[]")


def split_glob(pattern: Path) -> tuple[Path, bool]:
    """Return the non-wildcard base directory of a glob and whether it is recursive.

    The watch is recursive when any directory component below the base
    holds a wildcard, e.g. ``themes/*/scss/*.scss``.

    Example:
        >>> split_glob(Path("/site/src/scss/*.scss"))
        (PosixPath('/site/src/scss'), False)
        >>> split_glob(Path("/site/themes/*/scss/*.scss"))
        (PosixPath('/site/themes'), True)
    """
    base_parts: list[str] = []
    for part in pattern.parts:
        if _MAGIC.search(part):
            break
        base_parts.append(part)
    else:
        # No wildcard: a single file, watch its directory
        base_parts.pop()
    recursive = len(pattern.parts) - len(base_parts) > 1 or "**" in pattern.parts
    return Path(*base_parts) if base_parts else Path("."), recursive


def _match_parts(parts: tuple[str, ...], pattern_parts: tuple[str, ...]) -> bool:
    """Match path components against glob components; ``**`` spans zero or more."""
    if not pattern_parts:
        return not parts
    head, rest = pattern_parts[0], pattern_parts[1:]
    if head == "**":
        return any(_match_parts(parts[i:], rest) for i in range(len(parts) + 1))
    return bool(parts) and fnmatch.fnmatchcase(parts[0], head) and _match_parts(parts[1:], rest)


class _ChangeHandler(FileSystemEventHandler):
    """Forward matching filesystem events to a WatchTrigger."""

    def __init__(self, trigger: WatchTrigger) -> None:
        super().__init__()
        self.trigger = trigger

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory or event.event_type not in TRIGGER_EVENTS:
            return
        paths = [event.src_path]
        if event.event_type == EVENT_TYPE_MOVED:
            paths.append(event.dest_path)
        for path in paths:
            if path and self.trigger.notify(os.fsdecode(path)):
                return


class WatchTrigger:
    """Invoke a callback whenever a file matching a glob changes.

    Attributes:
        source_glob: Glob of watched files, relative to root unless absolute.
        on_change: Callback run for each rebuild, typically bound to
            StyleBuildTask.run.

    Example:
        >>> task = StyleBuildTask()
        >>> trigger = WatchTrigger(
        ...     "src/scss/*.scss",
        ...     lambda: task.run("src/scss/*.scss", "assets/css"),
        ... )
        >>> trigger.run_forever()
    """

    def __init__(
        self,
        source_glob: str,
        on_change: Callable[[], Any],
        root: Path | None = None,
        observer_factory: Callable[[], Any] | None = None,
    ) -> None:
        pattern = Path(source_glob)
        if not pattern.is_absolute():
            pattern = (root or Path.cwd()) / pattern

        self.source_glob = source_glob
        self.on_change = on_change
        self._pattern = os.path.normpath(pattern)
        self._watch_dir, self._recursive = split_glob(Path(self._pattern))
        self._pattern_parts = Path(self._pattern).relative_to(self._watch_dir).parts
        self._observer_factory = observer_factory
        self._observer: Any = None
        self._pending: queue.Queue[str] = queue.Queue(maxsize=1)
        self._stopped = threading.Event()
        self._state = WatchState.IDLE

    @property
    def state(self) -> WatchState:
        """Current lifecycle state."""
        return self._state

    @property
    def watch_dir(self) -> Path:
        """Directory monitored by the observer."""
        return self._watch_dir

    def matches(self, path: str) -> bool:
        """Check whether a filesystem path is selected by the watched glob."""
        try:
            parts = Path(os.path.normpath(path)).relative_to(self._watch_dir).parts
        except ValueError:
            return False
        return _match_parts(parts, self._pattern_parts)

    def notify(self, path: str) -> bool:
        """Record a change to path, queueing a rebuild if it matches.

        At most one rebuild is pending at a time; further changes before
        it starts are folded into it.

        Returns:
            True if path matched the watched glob.
        """
        if not self.matches(path):
            return False
        try:
            self._pending.put_nowait(path)
        except queue.Full:
            get_logger().debug("rebuild_coalesced", path=path)
        return True

    def start(self) -> None:
        """Begin monitoring the filesystem.

        Raises:
            WatchSetupError: If the watched directory does not exist.
        """
        if not self._watch_dir.is_dir():
            raise WatchSetupError(str(self._watch_dir))

        self._observer = (self._observer_factory or Observer)()
        self._observer.schedule(_ChangeHandler(self), str(self._watch_dir), recursive=self._recursive)
        self._observer.start()
        self._state = WatchState.IDLE
        get_logger().info("watch_started", path=str(self._watch_dir), pattern=self.source_glob)

    def run_once(self, timeout: float | None = None) -> bool:
        """Wait for one pending change and rebuild.

        Build errors do not propagate. Reporting them is left to the
        build itself, so they are only recorded at debug level here.

        Args:
            timeout: Seconds to wait for a change (None blocks).

        Returns:
            True if a rebuild ran.
        """
        try:
            path = self._pending.get(timeout=timeout)
        except queue.Empty:
            return False
        if self._stopped.is_set():
            return False

        logger = get_logger()
        self._state = WatchState.BUILDING
        logger.info("rebuild_triggered", path=path)
        try:
            self.on_change()
        except StyleBuildError as e:
            logger.debug("rebuild_failed", error=e.user_message)
        else:
            logger.info("rebuild_succeeded")
        finally:
            if not self._stopped.is_set():
                self._state = WatchState.IDLE
        return True

    def run_forever(self) -> None:
        """Start watching and process changes until stop() is called.

        A KeyboardInterrupt stops the trigger cleanly.

        Raises:
            WatchSetupError: If the watched directory does not exist.
        """
        if self._observer is None:
            self.start()
        try:
            while not self._stopped.is_set():
                self.run_once(timeout=POLL_INTERVAL)
        except KeyboardInterrupt:
            pass
        finally:
            self.stop()

    def stop(self) -> None:
        """Stop monitoring. Safe to call more than once."""
        if self._state is WatchState.STOPPED:
            return
        self._stopped.set()
        self._state = WatchState.STOPPED
        if self._observer is not None:
            self._observer.stop()
            if self._observer.is_alive():
                self._observer.join()
        get_logger().info("watch_stopped", path=str(self._watch_dir))


def watch(source_glob: str, on_change: Callable[[], Any], root: Path | None = None) -> None:
    """Watch source_glob and run on_change on every change until shutdown.

    Raises:
        WatchSetupError: If the watched directory does not exist.
    """
    WatchTrigger(source_glob, on_change, root=root).run_forever()
