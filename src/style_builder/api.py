"""Public build API (delegates to application use-cases)."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable
from typing import Optional

from style_builder.application.results import BuildResult
from style_builder.application.use_cases import build_configuration
from style_builder.application.use_cases import run_pipeline
from style_builder.settings import ProjectSettings


def build_styles(
    source_path: Optional[Path] = None,
    output_dir: Optional[Path] = None,
    *,
    profile: Optional[str] = None,
    browsers: Optional[Iterable[str]] = None,
    cascade: Optional[bool] = None,
    settings: Optional[ProjectSettings] = None,
) -> BuildResult:
    """Compile a LESS entry file into ``main.css`` and ``main.min.css``."""
    config = build_configuration(
        source_path=source_path,
        output_dir=output_dir,
        profile=profile,
        browsers=browsers,
        cascade=cascade,
        settings=settings,
    )
    return run_pipeline(config)
