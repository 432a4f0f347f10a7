"""Browser agents and global usage snapshot used for target resolution.

Usage shares are percentages of global traffic. The snapshot is shipped with
the package so that target resolution, and therefore the generated CSS, is
identical from one build to the next.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class Agent:
    """A browser with its vendor prefix and versions, oldest first."""

    name: str
    title: str
    prefix: str
    versions: tuple[tuple[str, float], ...]

    def version_names(self) -> tuple[str, ...]:
        """Return version labels, oldest first."""
        return tuple(version for version, _ in self.versions)

    def usage(self, version: str) -> float:
        """Return the usage share of ``version``."""
        return dict(self.versions)[version]


AGENTS: Mapping[str, Agent] = {
    agent.name: agent
    for agent in (
        Agent(
            "chrome",
            "Chrome",
            "-webkit-",
            (
                ("4", 0.01),
                ("21", 0.01),
                ("25", 0.01),
                ("28", 0.01),
                ("35", 0.01),
                ("42", 0.02),
                ("49", 0.04),
                ("53", 0.02),
                ("79", 0.05),
                ("83", 0.03),
                ("109", 0.55),
                ("119", 0.6),
                ("120", 2.1),
                ("121", 9.8),
                ("122", 3.4),
            ),
        ),
        Agent(
            "firefox",
            "Firefox",
            "-moz-",
            (
                ("2", 0.01),
                ("3.6", 0.01),
                ("10", 0.01),
                ("15", 0.01),
                ("28", 0.01),
                ("42", 0.01),
                ("51", 0.01),
                ("52", 0.02),
                ("68", 0.01),
                ("78", 0.02),
                ("79", 0.01),
                ("115", 0.4),
                ("121", 0.8),
                ("122", 1.9),
                ("123", 0.3),
            ),
        ),
        Agent(
            "safari",
            "Safari",
            "-webkit-",
            (
                ("3.1", 0.01),
                ("4", 0.01),
                ("5", 0.01),
                ("6", 0.01),
                ("6.1", 0.01),
                ("8", 0.01),
                ("9", 0.01),
                ("14", 0.05),
                ("15.3", 0.03),
                ("15.6", 0.12),
                ("16.6", 0.35),
                ("17.2", 0.7),
                ("17.3", 0.9),
            ),
        ),
        Agent(
            "ios_saf",
            "iOS Safari",
            "-webkit-",
            (
                ("3.2", 0.01),
                ("4.3", 0.01),
                ("6.0-6.1", 0.01),
                ("8", 0.02),
                ("9.0-9.2", 0.02),
                ("12.2-12.5", 0.3),
                ("15.0-15.3", 0.2),
                ("15.6-15.8", 0.9),
                ("16.6-16.7", 1.6),
                ("17.2", 2.6),
                ("17.3", 3.1),
            ),
        ),
        Agent(
            "opera",
            "Opera",
            "-webkit-",
            (
                ("9", 0.01),
                ("11.5", 0.01),
                ("11.6", 0.01),
                ("12", 0.01),
                ("12.1", 0.01),
                ("15", 0.01),
                ("16", 0.01),
                ("22", 0.01),
                ("29", 0.01),
                ("105", 0.3),
                ("106", 0.4),
            ),
        ),
        Agent(
            "edge",
            "Edge",
            "-ms-",
            (
                ("12", 0.01),
                ("18", 0.02),
                ("79", 0.01),
                ("120", 0.8),
                ("121", 3.9),
            ),
        ),
        Agent(
            "ie",
            "Internet Explorer",
            "-ms-",
            (
                ("6", 0.01),
                ("9", 0.02),
                ("10", 0.02),
                ("11", 0.3),
            ),
        ),
        Agent(
            "android",
            "Android Browser",
            "-webkit-",
            (
                ("2.1", 0.01),
                ("3", 0.01),
                ("4.3", 0.01),
                ("4.4", 0.01),
                ("4.4.3-4.4.4", 0.05),
                ("121", 0.4),
            ),
        ),
        Agent("and_chr", "Chrome for Android", "-webkit-", (("121", 40.5),)),
        Agent("samsung", "Samsung Internet", "-webkit-", (("4", 0.01), ("23", 2.7))),
    )
}

ALIASES: Mapping[str, str] = {
    "chrome": "chrome",
    "firefox": "firefox",
    "ff": "firefox",
    "fx": "firefox",
    "safari": "safari",
    "ios": "ios_saf",
    "ios_saf": "ios_saf",
    "opera": "opera",
    "edge": "edge",
    "ie": "ie",
    "explorer": "ie",
    "android": "android",
    "chromeandroid": "and_chr",
    "and_chr": "and_chr",
    "samsung": "samsung",
}

FIREFOX_ESR: tuple[str, ...] = ("115",)


def resolve_agent(name: str) -> Agent:
    """Return the agent for a browser name or alias.

    Raises
    ------
    ValueError
        If the browser is unknown.
    """
    key = ALIASES.get(name.strip().lower())
    if key is None:
        raise ValueError(f"Unknown browser '{name}'.")
    return AGENTS[key]


def version_key(version: str) -> tuple[int, ...]:
    """Return a sortable key for a version label.

    Ranges such as ``"9.0-9.2"`` sort by their first version. Trailing zero
    components are dropped so ``"6.0"`` and ``"6"`` compare equal.
    """
    head = version.split("-", 1)[0]
    parts = [int(part) for part in head.split(".") if part]
    while len(parts) > 1 and parts[-1] == 0:
        parts.pop()
    return tuple(parts)


def version_bounds(version: str) -> tuple[tuple[int, ...], tuple[int, ...]]:
    """Return inclusive ``(low, high)`` keys for a version or version range."""
    if "-" in version:
        low, high = version.split("-", 1)
        return version_key(low), version_key(high)
    key = version_key(version)
    return key, key
