"""Integration tests for WatchTrigger with a real watchdog observer."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
import threading
import time

import pytest

from stylebuild.models import WatchState
from stylebuild.task import StyleBuildTask
from stylebuild.watch import WatchTrigger

pytestmark = [pytest.mark.integration, pytest.mark.slow]

SOURCE_GLOB = "src/scss/*.scss"
DEST_DIR = "assets/css"
EVENT_TIMEOUT = 10.0


def wait_for(condition: Callable[[], bool], timeout: float = EVENT_TIMEOUT) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if condition():
            return True
        time.sleep(0.05)
    return condition()


class TestWatchTriggerObserver:
    """Tests driving WatchTrigger through real filesystem events."""

    def test_modification_triggers_rebuild(
        self, project: Path, write_scss: Callable[..., Path]
    ) -> None:
        """Test modifying a source rebuilds its output at least once."""
        source = write_scss("main.scss", ".a { color: red; }\n")
        task = StyleBuildTask(root=project)
        builds: list[int] = []

        def rebuild() -> None:
            task.run(SOURCE_GLOB, DEST_DIR)
            builds.append(1)

        trigger = WatchTrigger(SOURCE_GLOB, rebuild, root=project)
        trigger.start()
        worker = threading.Thread(target=trigger.run_forever, daemon=True)
        worker.start()
        try:
            source.write_text(".a { color: blue; }\n")

            assert wait_for(lambda: len(builds) >= 1)
            output = project / DEST_DIR / "main.css"
            assert wait_for(lambda: output.exists() and "blue" in output.read_text())
        finally:
            trigger.stop()
            worker.join(timeout=5)

        assert not worker.is_alive()
        assert trigger.state is WatchState.STOPPED

    def test_wildcard_directory_triggers_rebuild(self, project: Path) -> None:
        """Test a change below a wildcard directory component is seen."""
        theme_glob = "themes/*/scss/*.scss"
        source_dir = project / "themes" / "default" / "scss"
        source_dir.mkdir(parents=True)
        source = source_dir / "main.scss"
        source.write_text(".a { color: red; }\n")
        builds: list[int] = []

        trigger = WatchTrigger(theme_glob, lambda: builds.append(1), root=project)
        trigger.start()
        worker = threading.Thread(target=trigger.run_forever, daemon=True)
        worker.start()
        try:
            source.write_text(".a { color: blue; }\n")

            assert wait_for(lambda: len(builds) >= 1)
        finally:
            trigger.stop()
            worker.join(timeout=5)

    def test_broken_source_keeps_watching(
        self, project: Path, write_scss: Callable[..., Path]
    ) -> None:
        """Test a failed rebuild is followed by a successful one after a fix."""
        source = write_scss("main.scss", ".a { color: red; }\n")
        task = StyleBuildTask(root=project)
        output = project / DEST_DIR / "main.css"

        trigger = WatchTrigger(SOURCE_GLOB, lambda: task.run(SOURCE_GLOB, DEST_DIR), root=project)
        trigger.start()
        worker = threading.Thread(target=trigger.run_forever, daemon=True)
        worker.start()
        try:
            source.write_text(".a { color: red;\n")
            time.sleep(0.5)
            assert worker.is_alive()

            source.write_text(".a { color: green; }\n")
            assert wait_for(lambda: output.exists() and "green" in output.read_text())
        finally:
            trigger.stop()
            worker.join(timeout=5)

    def test_unrelated_file_does_not_rebuild(
        self, project: Path, write_scss: Callable[..., Path]
    ) -> None:
        """Test files outside the glob are ignored."""
        write_scss("main.scss")
        builds: list[int] = []

        trigger = WatchTrigger(SOURCE_GLOB, lambda: builds.append(1), root=project)
        trigger.start()
        worker = threading.Thread(target=trigger.run_forever, daemon=True)
        worker.start()
        try:
            (project / "src" / "scss" / "notes.txt").write_text("todo")
            time.sleep(1.0)
            assert builds == []
        finally:
            trigger.stop()
            worker.join(timeout=5)
