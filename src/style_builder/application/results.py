"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from style_builder.types import ArtifactRole, BrowserQuery


@dataclass(frozen=True)
class OutputArtifact:
    """A CSS file written by the pipeline."""

    path: Path
    role: ArtifactRole
    size_bytes: int
    sha256: str


@dataclass(frozen=True)
class BuildResult:
    """Structured build outcome."""

    main: OutputArtifact
    minified: OutputArtifact
    source_path: Path
    browsers: tuple[BrowserQuery, ...]
