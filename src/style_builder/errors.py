"""Error taxonomy for the stylesheet build pipeline."""

from __future__ import annotations

from pathlib import Path


class BuildError(Exception):
    """Base class for build failures.

    Attributes
    ----------
    step : str
        Pipeline step that failed.
    exit_code : int
        Process exit code used by the CLI.
    """

    step: str = "build"
    exit_code: int = 1

    def __init__(self, message: str, *, step: str | None = None) -> None:
        super().__init__(message)
        if step is not None:
            self.step = step


class ConfigError(BuildError):
    """Build configuration is invalid."""

    step = "configure"
    exit_code = 2


class CompileError(BuildError):
    """LESS source is missing or cannot be compiled.

    Parameters
    ----------
    message : str
        Underlying cause.
    path : Path
        File the error was reported for.
    line : int | None, default=None
        1-based line number, when known.
    column : int | None, default=None
        1-based column number, when known.
    """

    step = "compile"
    exit_code = 3

    def __init__(
        self,
        message: str,
        *,
        path: Path,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.line = line
        self.column = column

    @property
    def location(self) -> str:
        """Return ``path[:line[:column]]`` for display."""
        parts = [str(self.path)]
        if self.line is not None:
            parts.append(str(self.line))
            if self.column is not None:
                parts.append(str(self.column))
        return ":".join(parts)

    def __str__(self) -> str:
        return f"{self.location}: {self.args[0]}"


class PrefixError(BuildError):
    """Vendor prefixing failed."""

    step = "prefix"
    exit_code = 4


class WriteError(BuildError):
    """An output artifact could not be written."""

    step = "write"
    exit_code = 5

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(message)
        self.path = path


class MinifyError(BuildError):
    """CSS minification failed."""

    step = "minify"
    exit_code = 6
