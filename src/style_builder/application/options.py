"""Named prefix profiles and default build locations."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from style_builder.types import BrowserQuery, ProfileName

DEFAULT_SOURCE_PATH = Path("src") / "docs" / "less" / "styles.less"
DEFAULT_OUTPUT_DIR = Path("src") / "docs" / "style"


@dataclass(frozen=True)
class PrefixProfile:
    """Prefixing policy selectable by name."""

    name: ProfileName
    browsers: tuple[BrowserQuery, ...] | None
    cascade: bool = False
    description: str = ""


DOCS_PROFILE = PrefixProfile(
    name="docs",
    browsers=None,
    cascade=False,
    description="Default browser targets, no visual cascade.",
)

BROWSERS_PROFILE = PrefixProfile(
    name="browsers",
    browsers=("> 0%", "last 2 versions", "Firefox ESR", "Opera 12.1"),
    cascade=False,
    description="Explicit target list covering every tracked browser version.",
)

PROFILES: Mapping[str, PrefixProfile] = {
    profile.name: profile for profile in (DOCS_PROFILE, BROWSERS_PROFILE)
}


def get_profile(name: str) -> PrefixProfile:
    """Return the profile called ``name``.

    Raises
    ------
    KeyError
        If no such profile exists.
    """
    try:
        return PROFILES[name]
    except KeyError:
        known = ", ".join(sorted(PROFILES))
        raise KeyError(f"Unknown profile '{name}'. Known profiles: {known}.") from None
