"""Unit tests for CLI command behavior."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

import style_builder.api as api_module
from style_builder.application.results import BuildResult, OutputArtifact
from style_builder.cli import cli as cli_module
from style_builder.errors import CompileError

runner = CliRunner()


def _fake_result(output_dir: Path) -> BuildResult:
    return BuildResult(
        main=OutputArtifact(
            path=output_dir / "main.css", role="main", size_bytes=120, sha256="a"
        ),
        minified=OutputArtifact(
            path=output_dir / "main.min.css", role="minified", size_bytes=80, sha256="b"
        ),
        source_path=Path("styles.less"),
        browsers=("> 0.5%",),
    )


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the default ``pyproject.toml`` lookup away from the repository."""
    monkeypatch.chdir(tmp_path)


def test_help_shows_commands() -> None:
    """Ensure top-level help lists every subcommand."""
    result = runner.invoke(cli_module.app, ["--help"])

    assert result.exit_code == 0
    for command in ("styles", "default", "browsers", "doctor"):
        assert command in result.output


def test_styles_invokes_api(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the styles command forwards its options to the API layer."""
    called: dict[str, object] = {}

    def fake_build(**kwargs: object) -> BuildResult:
        called.update(kwargs)
        return _fake_result(tmp_path / "css")

    monkeypatch.setattr(api_module, "build_styles", fake_build)

    result = runner.invoke(
        cli_module.app,
        [
            "styles",
            "--source",
            str(tmp_path / "site.less"),
            "-o",
            str(tmp_path / "css"),
            "--profile",
            "browsers",
            "-b",
            "> 1%",
            "-b",
            "ie 10",
            "--cascade",
        ],
    )

    assert result.exit_code == 0, result.output
    assert called["source_path"] == tmp_path / "site.less"
    assert called["output_dir"] == tmp_path / "css"
    assert called["profile"] == "browsers"
    assert called["browsers"] == ["> 1%", "ie 10"]
    assert called["cascade"] is True
    assert "Saved:" in result.output
    assert "main.css (120 bytes)" in result.output
    assert "main.min.css (80 bytes)" in result.output


def test_styles_without_options_leaves_defaults_to_api(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Ensure unset options are not forwarded."""
    called: dict[str, object] = {}

    def fake_build(**kwargs: object) -> BuildResult:
        called.update(kwargs)
        return _fake_result(tmp_path)

    monkeypatch.setattr(api_module, "build_styles", fake_build)

    result = runner.invoke(cli_module.app, ["styles"])

    assert result.exit_code == 0, result.output
    assert set(called) == {"settings"}


def test_no_subcommand_runs_default_build(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Ensure a bare invocation builds with the configured defaults."""
    calls: list[dict[str, object]] = []

    def fake_build(**kwargs: object) -> BuildResult:
        calls.append(kwargs)
        return _fake_result(tmp_path)

    monkeypatch.setattr(api_module, "build_styles", fake_build)

    result = runner.invoke(cli_module.app, [])

    assert result.exit_code == 0, result.output
    assert len(calls) == 1
    assert "main.min.css" in result.output


def test_default_command_reads_project_settings(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Ensure ``--config`` points the build at a pyproject table."""
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text('[tool.style-builder]\nprofile = "browsers"\n', encoding="utf-8")
    called: dict[str, object] = {}

    def fake_build(**kwargs: object) -> BuildResult:
        called.update(kwargs)
        return _fake_result(tmp_path)

    monkeypatch.setattr(api_module, "build_styles", fake_build)

    result = runner.invoke(cli_module.app, ["--config", str(pyproject), "default"])

    assert result.exit_code == 0, result.output
    assert called["settings"].profile == "browsers"  # type: ignore[attr-defined]


def test_build_error_sets_exit_code(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Ensure build errors render cleanly with their step exit code."""

    def fake_build(**kwargs: object) -> BuildResult:
        raise CompileError(
            "Unbalanced braces: '{' is never closed.",
            path=tmp_path / "styles.less",
            line=3,
            column=1,
        )

    monkeypatch.setattr(api_module, "build_styles", fake_build)

    result = runner.invoke(cli_module.app, ["styles"])

    assert result.exit_code == 3
    assert "CompileError [compile]" in result.output
    assert "styles.less:3:1" in result.output
    assert "Traceback" not in result.output


def test_debug_prints_traceback(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure ``--debug`` adds traceback details to failures."""

    def fake_build(**kwargs: object) -> BuildResult:
        raise RuntimeError("unexpected")

    monkeypatch.setattr(api_module, "build_styles", fake_build)

    result = runner.invoke(cli_module.app, ["--debug", "styles"])

    assert result.exit_code == 1
    assert "RuntimeError" in result.output
    assert "Traceback" in result.output


def test_malformed_config_exits_with_config_code(tmp_path: Path) -> None:
    """Ensure a broken pyproject table stops the build before compiling."""
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text("[tool.style-builder]\nunknown = 1\n", encoding="utf-8")

    result = runner.invoke(cli_module.app, ["--config", str(pyproject), "styles"])

    assert result.exit_code == 2
    assert "ConfigError [configure]" in result.output


def test_browsers_lists_resolved_targets() -> None:
    """Ensure the browsers command prints queries and target labels."""
    result = runner.invoke(cli_module.app, ["browsers", "-b", "Opera 12.1", "-b", "ie 10"])

    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0] == "Queries: Opera 12.1, ie 10"
    assert lines[1:] == ["  Internet Explorer 10", "  Opera 12.1"]


def test_browsers_rejects_unknown_query() -> None:
    """Ensure invalid queries exit with the configuration error code."""
    result = runner.invoke(cli_module.app, ["browsers", "-b", "netscape 4"])

    assert result.exit_code == 2
    assert "Unknown browser" in result.output


def test_doctor_lists_toolchain_and_profiles() -> None:
    """Ensure doctor reports library versions and known profiles."""
    result = runner.invoke(cli_module.app, ["doctor"])

    assert result.exit_code == 0
    assert "Python:" in result.output
    assert "lesscpy:" in result.output
    assert "rcssmin:" in result.output
    assert "profile docs:" in result.output
    assert "profile browsers:" in result.output
