"""Browserslist-style query resolution against the bundled usage snapshot."""

from __future__ import annotations

import operator
import re
from collections.abc import Callable, Iterable
from functools import lru_cache

from style_builder.prefixing.agents import (
    AGENTS,
    FIREFOX_ESR,
    Agent,
    resolve_agent,
    version_bounds,
    version_key,
)
from style_builder.types import BrowserQuery, BrowserTarget

DEFAULT_QUERIES: tuple[BrowserQuery, ...] = ("> 0.5%", "last 2 versions", "Firefox ESR")

_USAGE_RE = re.compile(r"^(>=|<=|>|<)\s*(\d+(?:\.\d+)?)%$")
_LAST_RE = re.compile(r"^last\s+(\d+)\s+versions?$")
_LAST_BROWSER_RE = re.compile(r"^last\s+(\d+)\s+(\w+)\s+versions?$")
_ESR_RE = re.compile(r"^(?:firefox|ff|fx)\s+esr$")
_BROWSER_CMP_RE = re.compile(r"^(\w+)\s*(>=|<=|>|<)\s*(\d+(?:\.\d+)*)$")
_BROWSER_VERSION_RE = re.compile(r"^(\w+)\s+(\d+(?:\.\d+)*(?:-\d+(?:\.\d+)*)?)$")

_COMPARE: dict[str, Callable[[object, object], bool]] = {
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
}


def _all_targets() -> Iterable[tuple[Agent, str]]:
    for agent in AGENTS.values():
        for version in agent.version_names():
            yield agent, version


def _by_usage(op: str, share: float) -> set[BrowserTarget]:
    compare = _COMPARE[op]
    return {
        (agent.name, version)
        for agent, version in _all_targets()
        if compare(agent.usage(version), share)
    }


def _last_versions(count: int, agents: Iterable[Agent]) -> set[BrowserTarget]:
    if count <= 0:
        raise ValueError("'last N versions' needs N >= 1.")
    return {
        (agent.name, version)
        for agent in agents
        for version in agent.version_names()[-count:]
    }


def _find_version(agent: Agent, version: str) -> str:
    wanted = version_key(version)
    for known in agent.version_names():
        low, high = version_bounds(known)
        if known == version or low <= wanted <= high:
            return known
    raise ValueError(f"Unknown version {version} of {agent.title}.")


def _by_browser_version(agent: Agent, op: str, version: str) -> set[BrowserTarget]:
    compare = _COMPARE[op]
    wanted = version_key(version)
    return {
        (agent.name, known)
        for known in agent.version_names()
        if compare(version_key(known), wanted)
    }


def select(query: BrowserQuery) -> set[BrowserTarget]:
    """Return targets matched by one positive query.

    Parameters
    ----------
    query : str
        A single query such as ``"> 1%"`` or ``"Opera 12.1"``.

    Raises
    ------
    ValueError
        If the query is unknown or names an unknown browser/version.
    """
    text = " ".join(query.strip().lower().split())
    if text == "defaults":
        return resolve_targets(DEFAULT_QUERIES)
    if match := _USAGE_RE.match(text):
        return _by_usage(match.group(1), float(match.group(2)))
    if match := _LAST_RE.match(text):
        return _last_versions(int(match.group(1)), AGENTS.values())
    if match := _LAST_BROWSER_RE.match(text):
        return _last_versions(int(match.group(1)), [resolve_agent(match.group(2))])
    if _ESR_RE.match(text):
        return {("firefox", version) for version in FIREFOX_ESR}
    if match := _BROWSER_CMP_RE.match(text):
        agent = resolve_agent(match.group(1))
        return _by_browser_version(agent, match.group(2), match.group(3))
    if match := _BROWSER_VERSION_RE.match(text):
        agent = resolve_agent(match.group(1))
        return {(agent.name, _find_version(agent, match.group(2)))}
    raise ValueError(f"Unknown browser query '{query}'.")


def split_queries(queries: Iterable[BrowserQuery]) -> tuple[BrowserQuery, ...]:
    """Flatten comma-separated query strings into single queries."""
    flat: list[str] = []
    for entry in queries:
        flat.extend(part.strip() for part in entry.split(",") if part.strip())
    return tuple(flat)


@lru_cache(maxsize=32)
def _resolve(queries: tuple[BrowserQuery, ...]) -> frozenset[BrowserTarget]:
    selected: set[BrowserTarget] = set()
    for query in queries:
        stripped = query.strip()
        if stripped.lower().startswith("not "):
            selected -= select(stripped[4:])
        else:
            selected |= select(stripped)
    return frozenset(selected)


def resolve_targets(queries: Iterable[BrowserQuery] | None) -> frozenset[BrowserTarget]:
    """Resolve queries into ``(agent, version)`` targets.

    ``None`` resolves :data:`DEFAULT_QUERIES`. Queries apply in order; a
    ``not`` query removes targets selected by the queries before it.
    """
    flat = split_queries(DEFAULT_QUERIES if queries is None else queries)
    if not flat:
        raise ValueError("At least one browser query is required.")
    return _resolve(flat)


def describe_targets(targets: Iterable[BrowserTarget]) -> list[str]:
    """Return human-readable target labels sorted by browser and version."""
    ordered = sorted(targets, key=lambda item: (item[0], version_key(item[1])))
    return [f"{AGENTS[name].title} {version}" for name, version in ordered]
