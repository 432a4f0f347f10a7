"""Application-layer use-cases and option objects."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from style_builder.application.options import (
    BROWSERS_PROFILE,
    DOCS_PROFILE,
    PROFILES,
    PrefixProfile,
)
from style_builder.application.ports import (
    ArtifactWriter,
    Minifier,
    Prefixer,
    StylesheetCompiler,
)
from style_builder.application.results import BuildResult, OutputArtifact
from style_builder.schemas import BuildConfiguration
from style_builder.settings import ProjectSettings


def build_configuration(
    *,
    source_path: Path | None = None,
    output_dir: Path | None = None,
    profile: str | None = None,
    browsers: Iterable[str] | None = None,
    cascade: bool | None = None,
    basename: str = "main",
    min_suffix: str = ".min",
    settings: ProjectSettings | None = None,
) -> BuildConfiguration:
    """Build a validated configuration via lazy use-case import."""
    from style_builder.application.use_cases import build_configuration as _impl

    return _impl(
        source_path=source_path,
        output_dir=output_dir,
        profile=profile,
        browsers=browsers,
        cascade=cascade,
        basename=basename,
        min_suffix=min_suffix,
        settings=settings,
    )


def run_pipeline(
    config: BuildConfiguration,
    *,
    compiler: StylesheetCompiler | None = None,
    prefixer: Prefixer | None = None,
    minifier: Minifier | None = None,
    writer: ArtifactWriter | None = None,
) -> BuildResult:
    """Run the stylesheet pipeline via lazy use-case import."""
    from style_builder.application.use_cases import run_pipeline as _impl

    return _impl(
        config,
        compiler=compiler,
        prefixer=prefixer,
        minifier=minifier,
        writer=writer,
    )


__all__ = [
    "BROWSERS_PROFILE",
    "DOCS_PROFILE",
    "PROFILES",
    "BuildConfiguration",
    "BuildResult",
    "OutputArtifact",
    "PrefixProfile",
    "build_configuration",
    "run_pipeline",
]
