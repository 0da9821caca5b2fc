"""CLI command modules.

Commands are loaded lazily by stylebuild.cli.main.StylebuildGroup.
"""

from __future__ import annotations

__all__: list[str] = []
