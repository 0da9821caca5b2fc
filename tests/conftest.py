"""Shared test fixtures for stylebuild tests.

Provides CliRunner fixtures and helpers for laying out a small theme
directory with SCSS sources.
"""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path
from typing import TYPE_CHECKING

from click.testing import CliRunner
import pytest

if TYPE_CHECKING:
    from collections.abc import Callable

SOURCE_DIR = Path("src") / "scss"
VALID_SCSS = """\
$accent: #336699;

/* navigation */
.nav {
  color: $accent;

  a {
    text-decoration: none;
  }
}
"""


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def isolated_runner(cli_runner: CliRunner) -> Generator[CliRunner, None, None]:
    """Create a Click test runner with an isolated filesystem.

    Yields:
        CliRunner instance with isolated filesystem.
    """
    with cli_runner.isolated_filesystem():
        yield cli_runner


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Return a project root with an empty src/scss directory."""
    (tmp_path / SOURCE_DIR).mkdir(parents=True)
    return tmp_path


@pytest.fixture
def write_scss(project: Path) -> Callable[..., Path]:
    """Factory fixture writing a stylesheet under the project's src/scss.

    Returns:
        Function taking a file name and optional content.
    """

    def _write(name: str, content: str = VALID_SCSS) -> Path:
        path = project / SOURCE_DIR / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def create_scss(isolated_runner: CliRunner) -> Callable[..., Path]:
    """Factory fixture writing a stylesheet inside the isolated filesystem."""

    def _create(name: str, content: str = VALID_SCSS) -> Path:
        path = SOURCE_DIR / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _create
