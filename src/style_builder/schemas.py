"""Pydantic schemas for runtime validation of build configuration."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from style_builder.prefixing.browsers import resolve_targets, split_queries


class PrefixOptions(BaseModel):
    """Options forwarded unmodified to the prefixing step.

    ``browsers=None`` selects the default policy.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    browsers: tuple[str, ...] | None = None
    cascade: bool = False

    @field_validator("browsers")
    @classmethod
    def _validate_browsers(cls, value: tuple[str, ...] | None) -> tuple[str, ...] | None:
        if value is None:
            return None
        queries = split_queries(value)
        if not queries:
            raise ValueError("browsers must contain at least one query.")
        resolve_targets(queries)
        return queries


class BuildConfiguration(BaseModel):
    """Validated input for one pipeline run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    source_path: Path
    output_dir: Path
    prefix: PrefixOptions = Field(default_factory=PrefixOptions)
    basename: str = "main"
    min_suffix: str = ".min"

    @field_validator("basename")
    @classmethod
    def _validate_basename(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("basename cannot be empty.")
        if "/" in value or "\\" in value or value in {".", ".."}:
            raise ValueError("basename must be a bare file stem.")
        return value

    @field_validator("min_suffix")
    @classmethod
    def _validate_min_suffix(cls, value: str) -> str:
        if not value.startswith(".") or len(value) < 2:
            raise ValueError("min_suffix must start with '.' and name a suffix.")
        if "/" in value or "\\" in value:
            raise ValueError("min_suffix cannot contain path separators.")
        return value

    @property
    def main_filename(self) -> str:
        """File name of the unminified artifact."""
        return f"{self.basename}.css"

    @property
    def minified_filename(self) -> str:
        """File name of the minified artifact."""
        return f"{self.basename}{self.min_suffix}.css"
