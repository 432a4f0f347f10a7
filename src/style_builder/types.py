"""Shared type aliases for the build pipeline."""

from __future__ import annotations

from typing import Literal, TypeAlias

ArtifactRole: TypeAlias = Literal["main", "minified"]
ProfileName: TypeAlias = Literal["docs", "browsers"]
BrowserQuery: TypeAlias = str
BrowserTarget: TypeAlias = tuple[str, str]
"""``(agent, version)`` pair, e.g. ``("safari", "8")``."""
