"""Data models for stylebuild builds."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class CompiledAsset(BaseModel):
    """In-memory result of running the pipeline stages on one source file.

    A CompiledAsset is owned by a single build run and is discarded once
    it has been written to the output directory.

    Attributes:
        source: Path of the source stylesheet.
        output_name: File name of the CSS output (``<stem>.css``).
        css: CSS text after the most recent stage.

    Example:
        >>> asset = CompiledAsset.for_source(Path("src/scss/main.scss"), "a{color:red}")
        >>> asset.output_name
        'main.css'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source: Path
    output_name: str
    css: str = ""

    @classmethod
    def for_source(cls, source: Path, css: str = "") -> CompiledAsset:
        """Create an asset whose output name is derived from the source stem."""
        return cls(source=source, output_name=f"{source.stem}.css", css=css)

    def with_css(self, css: str) -> CompiledAsset:
        """Return a copy of this asset carrying new CSS text."""
        return self.model_copy(update={"css": css})


class WrittenFile(BaseModel):
    """A stylesheet persisted by a successful build.

    Attributes:
        source: Path of the source stylesheet.
        output: Path of the written CSS file.
        size: Size of the written file in bytes.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source: Path
    output: Path
    size: int = Field(ge=0, description="Size of the written file in bytes")


class WatchState(str, Enum):
    """Lifecycle states of a WatchTrigger."""

    IDLE = "idle"
    BUILDING = "building"
    STOPPED = "stopped"
