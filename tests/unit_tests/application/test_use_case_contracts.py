"""Unit tests for application use-case contracts."""

from __future__ import annotations

from pathlib import Path

import pytest

from style_builder.application.options import (
    BROWSERS_PROFILE,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_SOURCE_PATH,
)
from style_builder.application.results import OutputArtifact
from style_builder.application.use_cases import build_configuration, run_pipeline
from style_builder.errors import CompileError, ConfigError, MinifyError
from style_builder.prefixing import DEFAULT_QUERIES
from style_builder.schemas import PrefixOptions
from style_builder.settings import ProjectSettings


class _Compiler:
    def __init__(self, log: list[str], css: str = ".a{}", fail: bool = False) -> None:
        self.log = log
        self.css = css
        self.fail = fail

    def compile(self, source_path: Path) -> str:
        self.log.append(f"compile:{source_path.name}")
        if self.fail:
            raise CompileError("unbalanced", path=source_path, line=1)
        return self.css


class _Prefixer:
    def __init__(self, log: list[str]) -> None:
        self.log = log
        self.options: PrefixOptions | None = None

    def prefix(self, css: str, options: PrefixOptions) -> str:
        self.log.append("prefix")
        self.options = options
        return css + "/*prefixed*/"


class _Minifier:
    def __init__(self, log: list[str], fail: bool = False) -> None:
        self.log = log
        self.fail = fail

    def minify(self, css: str) -> str:
        self.log.append("minify")
        if self.fail:
            raise MinifyError("broken css")
        return css.replace("/*prefixed*/", "")


class _Writer:
    def __init__(self, log: list[str]) -> None:
        self.log = log
        self.files: dict[Path, str] = {}

    def write(self, path: Path, text: str, role: str) -> OutputArtifact:
        self.log.append(f"write:{path.name}")
        self.files[path] = text
        return OutputArtifact(path=path, role=role, size_bytes=len(text), sha256="x")  # type: ignore[arg-type]


def _config(tmp_path: Path, name: str = "styles.less", **kwargs: object):
    return build_configuration(
        source_path=tmp_path / name, output_dir=tmp_path / "out", **kwargs
    )


def test_pipeline_runs_steps_in_fixed_order(tmp_path: Path) -> None:
    """Verify compile, prefix, write, minify, write ordering."""
    log: list[str] = []

    result = run_pipeline(
        _config(tmp_path),
        compiler=_Compiler(log),
        prefixer=_Prefixer(log),
        minifier=_Minifier(log),
        writer=_Writer(log),
    )

    assert log == [
        "compile:styles.less",
        "prefix",
        "write:main.css",
        "minify",
        "write:main.min.css",
    ]
    assert result.main.path == tmp_path / "out" / "main.css"
    assert result.minified.path == tmp_path / "out" / "main.min.css"
    assert result.source_path == tmp_path / "styles.less"
    assert result.browsers == DEFAULT_QUERIES


def test_output_names_do_not_depend_on_source_name(tmp_path: Path) -> None:
    """Verify the rename step always produces ``main`` artifacts."""
    log: list[str] = []
    writer = _Writer(log)

    run_pipeline(
        _config(tmp_path, name="entry.less"),
        compiler=_Compiler(log),
        prefixer=_Prefixer(log),
        minifier=_Minifier(log),
        writer=writer,
    )

    assert sorted(path.name for path in writer.files) == ["main.css", "main.min.css"]


def test_compile_failure_stops_before_any_write(tmp_path: Path) -> None:
    """Verify a compile error propagates unmodified and nothing is written."""
    log: list[str] = []
    writer = _Writer(log)

    with pytest.raises(CompileError) as excinfo:
        run_pipeline(
            _config(tmp_path),
            compiler=_Compiler(log, fail=True),
            prefixer=_Prefixer(log),
            minifier=_Minifier(log),
            writer=writer,
        )

    assert excinfo.value.line == 1
    assert log == ["compile:styles.less"]
    assert writer.files == {}


def test_minify_failure_keeps_unminified_artifact(tmp_path: Path) -> None:
    """Verify earlier artifacts are not rolled back after a later failure."""
    log: list[str] = []
    writer = _Writer(log)

    with pytest.raises(MinifyError):
        run_pipeline(
            _config(tmp_path),
            compiler=_Compiler(log),
            prefixer=_Prefixer(log),
            minifier=_Minifier(log, fail=True),
            writer=writer,
        )

    assert list(writer.files) == [tmp_path / "out" / "main.css"]
    assert log[-1] == "minify"


def test_prefix_options_are_passed_unmodified(tmp_path: Path) -> None:
    """Verify the prefixer receives the configured options object."""
    log: list[str] = []
    prefixer = _Prefixer(log)
    config = _config(tmp_path, profile="browsers")

    result = run_pipeline(
        config,
        compiler=_Compiler(log),
        prefixer=prefixer,
        minifier=_Minifier(log),
        writer=_Writer(log),
    )

    assert prefixer.options is config.prefix
    assert result.browsers == BROWSERS_PROFILE.browsers


def test_build_configuration_defaults() -> None:
    """Verify defaults mirror the docs layout and profile."""
    config = build_configuration()

    assert config.source_path == DEFAULT_SOURCE_PATH
    assert config.output_dir == DEFAULT_OUTPUT_DIR
    assert config.prefix == PrefixOptions(browsers=None, cascade=False)
    assert config.main_filename == "main.css"
    assert config.minified_filename == "main.min.css"


def test_browsers_profile_uses_explicit_list() -> None:
    """Verify the explicit profile carries its browser list without cascade."""
    config = build_configuration(profile="browsers")

    assert config.prefix.browsers == (
        "> 0%",
        "last 2 versions",
        "Firefox ESR",
        "Opera 12.1",
    )
    assert config.prefix.cascade is False


def test_arguments_override_settings_and_profile(tmp_path: Path) -> None:
    """Verify precedence: explicit argument > settings > profile."""
    settings = ProjectSettings(
        source=tmp_path / "from-settings.less",
        profile="browsers",
        cascade=True,
    )

    config = build_configuration(
        source_path=tmp_path / "explicit.less",
        browsers=["last 1 versions"],
        settings=settings,
    )

    assert config.source_path == tmp_path / "explicit.less"
    assert config.output_dir == DEFAULT_OUTPUT_DIR
    assert config.prefix.browsers == ("last 1 versions",)
    assert config.prefix.cascade is True


def test_unknown_profile_is_a_config_error() -> None:
    """Verify profile typos fail during configuration."""
    with pytest.raises(ConfigError, match="Unknown profile"):
        build_configuration(profile="legacy")


def test_invalid_browser_query_is_a_config_error() -> None:
    """Verify unparseable queries fail before the pipeline runs."""
    with pytest.raises(ConfigError, match="Unknown browser"):
        build_configuration(browsers=["Netscape 4"])


@pytest.mark.parametrize(
    ("field", "value"),
    [("basename", ""), ("basename", "../main"), ("min_suffix", "min")],
)
def test_invalid_artifact_names_are_config_errors(field: str, value: str) -> None:
    """Verify artifact naming is validated."""
    with pytest.raises(ConfigError) as excinfo:
        build_configuration(**{field: value})

    assert excinfo.value.exit_code == 2
