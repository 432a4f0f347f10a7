"""Application ports for the pipeline steps."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from style_builder.application.results import OutputArtifact
from style_builder.schemas import PrefixOptions
from style_builder.types import ArtifactRole


class StylesheetCompiler(Protocol):
    """Compile a stylesheet source file into flat CSS."""

    def compile(self, source_path: Path) -> str:
        """Return compiled CSS text."""


class Prefixer(Protocol):
    """Add vendor-prefixed declarations to CSS."""

    def prefix(self, css: str, options: PrefixOptions) -> str:
        """Return prefixed CSS text."""


class Minifier(Protocol):
    """Compress CSS without changing how it renders."""

    def minify(self, css: str) -> str:
        """Return minified CSS text."""


class ArtifactWriter(Protocol):
    """Persist CSS text as an output artifact."""

    def write(self, path: Path, text: str, role: ArtifactRole) -> OutputArtifact:
        """Write ``text`` to ``path`` and describe the written file."""
