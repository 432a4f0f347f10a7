"""Top-level API for compiling the documentation stylesheet."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from style_builder.application.results import BuildResult

__version__ = "0.1.0"


def build_styles(
    source_path: Path | None = None,
    output_dir: Path | None = None,
    *,
    profile: str | None = None,
    browsers: Iterable[str] | None = None,
    cascade: bool | None = None,
) -> BuildResult:
    """Compile a LESS entry file into prefixed, minified CSS artifacts.

    Parameters
    ----------
    source_path : Path, optional
        LESS entry file. Defaults to ``src/docs/less/styles.less``.
    output_dir : Path, optional
        Directory receiving ``main.css`` and ``main.min.css``. Defaults to
        ``src/docs/style``; created when absent.
    profile : {"docs", "browsers"}, optional
        Prefix profile. ``docs`` uses the default browser targets,
        ``browsers`` an explicit target list. Defaults to ``docs``.
    browsers : Iterable[str], optional
        Browser queries overriding the profile's list.
    cascade : bool, optional
        Right-align prefixed property names. Defaults to the profile's
        setting (``False`` for both built-in profiles).

    Returns
    -------
    BuildResult
        Paths, sizes and digests of both artifacts.
    """
    from .api import build_styles as _impl

    return _impl(
        source_path=source_path,
        output_dir=output_dir,
        profile=profile,
        browsers=browsers,
        cascade=cascade,
    )


__all__ = ["build_styles"]
