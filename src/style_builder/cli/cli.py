#!/usr/bin/env python3
"""
style_builder.cli.app

Typer-based CLI for building the documentation stylesheet.

Running the CLI without a subcommand runs ``default``, which builds with
the configured defaults, exactly like ``styles`` without options.

Examples
--------
Build with defaults (``src/docs/less/styles.less`` -> ``src/docs/style``):

    build-styles

Build another entry with the explicit browser list:

    build-styles styles --source less/main.less --output-dir site/css --profile browsers
"""

from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path
from typing import Any

import typer

from style_builder.errors import BuildError
from style_builder.settings import ProjectSettings, load_project_settings

app = typer.Typer(
    name="build-styles",
    help="Compile the docs LESS stylesheet into prefixed and minified CSS.",
    invoke_without_command=True,
)

PROFILE_HELP = "Prefix profile: 'docs' (default targets) or 'browsers' (explicit list)."
BROWSER_HELP = "Browser query overriding the profile, e.g. '> 1%' (repeatable)."
CONFIG_HELP = "pyproject.toml holding a [tool.style-builder] table."


def _print_build_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly build error.

    Parameters
    ----------
    exc : Exception
        Exception raised during the build.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    step = getattr(exc, "step", None)
    label = f"{type(exc).__name__} [{step}]" if step else type(exc).__name__
    typer.echo(f"[red]✗ {label}:[/red] {exc}", err=True)
    if debug:
        typer.echo("\n[dim]Traceback:[/dim]", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _load_settings(ctx: typer.Context) -> ProjectSettings:
    return load_project_settings(ctx.obj["config_path"])


def _run_build(
    ctx: typer.Context,
    *,
    source_path: Path | None = None,
    output_dir: Path | None = None,
    profile: str | None = None,
    browsers: list[str] | None = None,
    cascade: bool | None = None,
) -> None:
    """Run the pipeline and report both artifacts."""
    debug: bool = bool(ctx.obj.get("debug", False))

    try:
        from style_builder.api import build_styles

        kwargs: dict[str, Any] = {"settings": _load_settings(ctx)}
        if source_path is not None:
            kwargs["source_path"] = source_path
        if output_dir is not None:
            kwargs["output_dir"] = output_dir
        if profile is not None:
            kwargs["profile"] = profile
        if browsers:
            kwargs["browsers"] = browsers
        if cascade is not None:
            kwargs["cascade"] = cascade

        result = build_styles(**kwargs)
        for artifact in (result.main, result.minified):
            typer.echo(
                f"[green]✓ Saved:[/green] {artifact.path} ({artifact.size_bytes} bytes)"
            )
    except BuildError as exc:
        raise typer.Exit(code=_print_build_error(exc, debug))
    except Exception as exc:
        # Unexpected crash: still show a clean message; debug prints traceback.
        raise typer.Exit(code=_print_build_error(exc, debug))


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every pipeline step."),
    config: Path = typer.Option(Path("pyproject.toml"), "--config", help=CONFIG_HELP),
) -> None:
    """Initialize shared CLI state.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    debug : bool, default=False
        Whether to enable debug error output.
    verbose : bool, default=False
        Whether to log pipeline steps at DEBUG level.
    config : Path
        Project file read for build defaults.
    """
    ctx.obj = {"debug": debug, "config_path": config}
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )
    if ctx.invoked_subcommand is None:
        default_cmd(ctx)


# -----------------------------
# Commands
# -----------------------------
@app.command("styles")
def styles_cmd(
    ctx: typer.Context,
    source: Path | None = typer.Option(
        None, "--source", "-s", help="LESS entry file (default: src/docs/less/styles.less)."
    ),
    output_dir: Path | None = typer.Option(
        None, "--output-dir", "-o", help="Output directory (default: src/docs/style)."
    ),
    profile: str | None = typer.Option(None, "--profile", help=PROFILE_HELP),
    browser: list[str] | None = typer.Option(None, "--browser", "-b", help=BROWSER_HELP),
    cascade: bool | None = typer.Option(
        None, "--cascade/--no-cascade", help="Right-align prefixed property names."
    ),
) -> None:
    """Compile, prefix and minify the stylesheet.

    Writes ``main.css`` and ``main.min.css`` into the output directory.
    """
    _run_build(
        ctx,
        source_path=source,
        output_dir=output_dir,
        profile=profile,
        browsers=browser,
        cascade=cascade,
    )


@app.command("default")
def default_cmd(ctx: typer.Context) -> None:
    """Alias for ``styles`` with the configured defaults."""
    _run_build(ctx)


@app.command("browsers")
def browsers_cmd(
    ctx: typer.Context,
    profile: str | None = typer.Option(None, "--profile", help=PROFILE_HELP),
    browser: list[str] | None = typer.Option(None, "--browser", "-b", help=BROWSER_HELP),
) -> None:
    """Print the browser targets a build would prefix for."""
    debug: bool = bool(ctx.obj.get("debug", False))

    try:
        from style_builder.application.use_cases import build_configuration
        from style_builder.prefixing import DEFAULT_QUERIES, describe_targets, resolve_targets

        config = build_configuration(
            profile=profile,
            browsers=browser or None,
            settings=_load_settings(ctx),
        )
        queries = config.prefix.browsers or DEFAULT_QUERIES
        typer.echo(f"Queries: {', '.join(queries)}")
        for label in describe_targets(resolve_targets(queries)):
            typer.echo(f"  {label}")
    except BuildError as exc:
        raise typer.Exit(code=_print_build_error(exc, debug))


@app.command("doctor")
def doctor_cmd() -> None:
    """Print installed toolchain versions and available profiles."""
    import importlib.metadata as metadata

    from style_builder.application.options import PROFILES

    typer.echo(f"Python: {sys.version.split()[0]}")
    for module in ("lesscpy", "rcssmin", "pydantic", "typer"):
        try:
            version = metadata.version(module)
            typer.echo(f"{module}: {version}")
        except metadata.PackageNotFoundError:
            typer.echo(f"{module}: <not installed>")

    for name, profile in PROFILES.items():
        typer.echo(f"profile {name}: {profile.description}")


if __name__ == "__main__":
    app()
