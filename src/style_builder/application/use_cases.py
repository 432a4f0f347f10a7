"""Application use-cases orchestrating the stylesheet build."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TypeVar

from pydantic import ValidationError

from style_builder.adapters.compilers import LesscpyCompiler
from style_builder.adapters.minifiers import RcssminMinifier
from style_builder.adapters.prefixers import AutoPrefixer
from style_builder.application.options import (
    DEFAULT_OUTPUT_DIR,
    DEFAULT_SOURCE_PATH,
    DOCS_PROFILE,
    get_profile,
)
from style_builder.application.ports import (
    ArtifactWriter,
    Minifier,
    Prefixer,
    StylesheetCompiler,
)
from style_builder.application.results import BuildResult
from style_builder.errors import ConfigError
from style_builder.infrastructure.writers import FileArtifactWriter
from style_builder.prefixing import DEFAULT_QUERIES
from style_builder.schemas import BuildConfiguration, PrefixOptions
from style_builder.settings import ProjectSettings

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _first(*values: T | None) -> T | None:
    for value in values:
        if value is not None:
            return value
    return None


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
    """Build a validated configuration from arguments, settings and profile.

    Explicit arguments win over ``settings``, which win over the profile
    and the default paths.

    Raises
    ------
    ConfigError
        If the profile is unknown or any value fails validation.
    """
    settings = settings or ProjectSettings()
    profile_name = _first(profile, settings.profile) or DOCS_PROFILE.name
    try:
        chosen = get_profile(profile_name)
    except KeyError as exc:
        raise ConfigError(str(exc.args[0])) from exc

    explicit_browsers = tuple(browsers) if browsers is not None else None
    try:
        return BuildConfiguration(
            source_path=_first(source_path, settings.source) or DEFAULT_SOURCE_PATH,
            output_dir=_first(output_dir, settings.output_dir) or DEFAULT_OUTPUT_DIR,
            prefix=PrefixOptions(
                browsers=_first(explicit_browsers, settings.browsers, chosen.browsers),
                cascade=bool(_first(cascade, settings.cascade, chosen.cascade)),
            ),
            basename=basename,
            min_suffix=min_suffix,
        )
    except ValidationError as exc:
        raise ConfigError(f"Invalid build configuration: {exc}") from exc


def run_pipeline(
    config: BuildConfiguration,
    *,
    compiler: StylesheetCompiler | None = None,
    prefixer: Prefixer | None = None,
    minifier: Minifier | None = None,
    writer: ArtifactWriter | None = None,
) -> BuildResult:
    """Use-case: compile, prefix, write, minify and write again.

    Steps run in that fixed order. The first failing step raises its
    ``BuildError`` subclass and nothing after it runs; artifacts written
    before the failure are left in place.

    Parameters
    ----------
    config : BuildConfiguration
        Validated build configuration.
    compiler, prefixer, minifier, writer : optional
        Port implementations; the lesscpy/autoprefixer/rcssmin/filesystem
        adapters are used when omitted.

    Returns
    -------
    BuildResult
        Both written artifacts.
    """
    compiler = compiler or LesscpyCompiler()
    prefixer = prefixer or AutoPrefixer()
    minifier = minifier or RcssminMinifier()
    writer = writer or FileArtifactWriter()

    logger.debug("compiling %s", config.source_path)
    css = compiler.compile(config.source_path)

    main_path = config.output_dir / config.main_filename
    minified_path = config.output_dir / config.minified_filename
    logger.debug(
        "output renamed %s -> %s", config.source_path.name, config.main_filename
    )

    browsers = config.prefix.browsers or DEFAULT_QUERIES
    logger.debug("prefixing for %s (cascade=%s)", ", ".join(browsers), config.prefix.cascade)
    prefixed = prefixer.prefix(css, config.prefix)

    logger.debug("writing %s", main_path)
    main = writer.write(main_path, prefixed, "main")

    logger.debug("minifying %d bytes", main.size_bytes)
    minified_css = minifier.minify(prefixed)

    logger.debug("writing %s", minified_path)
    minified = writer.write(minified_path, minified_css, "minified")

    logger.info(
        "built %s (%d bytes) and %s (%d bytes) from %s",
        main.path,
        main.size_bytes,
        minified.path,
        minified.size_bytes,
        config.source_path,
    )
    return BuildResult(
        main=main,
        minified=minified,
        source_path=config.source_path,
        browsers=tuple(browsers),
    )
