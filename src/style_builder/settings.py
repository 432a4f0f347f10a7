"""Project settings read from the ``[tool.style-builder]`` table of pyproject.toml."""

from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from style_builder.errors import ConfigError

TOOL_TABLE = "style-builder"


class ProjectSettings(BaseModel):
    """Build defaults declared by the project.

    Every field is optional; explicit CLI/API arguments take precedence.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    source: Path | None = None
    output_dir: Path | None = Field(default=None, alias="output-dir")
    profile: str | None = None
    browsers: tuple[str, ...] | None = None
    cascade: bool | None = None


def load_project_settings(pyproject_path: Path) -> ProjectSettings:
    """Load settings from ``pyproject_path``.

    A missing file or a file without the table yields empty settings.
    Relative paths are resolved against the file's directory.

    Raises
    ------
    ConfigError
        If the file cannot be read or the table is malformed.
    """
    if not pyproject_path.is_file():
        return ProjectSettings()

    try:
        data = tomllib.loads(pyproject_path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Cannot read {pyproject_path}: {exc}") from exc

    table = data.get("tool", {}).get(TOOL_TABLE, {})
    if not isinstance(table, dict):
        raise ConfigError(f"[tool.{TOOL_TABLE}] in {pyproject_path} must be a table.")

    try:
        settings = ProjectSettings.model_validate(table)
    except ValidationError as exc:
        raise ConfigError(
            f"Invalid [tool.{TOOL_TABLE}] in {pyproject_path}: {exc}"
        ) from exc

    root = pyproject_path.parent
    updates: dict[str, Path] = {}
    if settings.source is not None and not settings.source.is_absolute():
        updates["source"] = root / settings.source
    if settings.output_dir is not None and not settings.output_dir.is_absolute():
        updates["output_dir"] = root / settings.output_dir
    return settings.model_copy(update=updates) if updates else settings
