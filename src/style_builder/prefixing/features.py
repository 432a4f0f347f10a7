"""Vendor prefix rules for properties and values.

A rule lists the browser version ranges that still need a prefixed form.
Ranges are inclusive; ``first=None`` means "every version up to ``last``"
and ``last=None`` means "every version from ``first``".
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from style_builder.prefixing.agents import version_key
from style_builder.types import BrowserTarget

PREFIX_ORDER: tuple[str, ...] = ("-webkit-", "-moz-", "-ms-", "-o-")

WEBKIT = "-webkit-"
MOZ = "-moz-"
MS = "-ms-"
OPERA = "-o-"


@dataclass(frozen=True)
class PrefixRange:
    """Versions of one browser that need ``prefix``."""

    agent: str
    prefix: str
    last: str | None
    first: str | None = None

    def matches(self, target: BrowserTarget) -> bool:
        """Return whether ``target`` falls in this range."""
        agent, version = target
        if agent != self.agent:
            return False
        key = version_key(version)
        if self.first is not None and key < version_key(self.first):
            return False
        if self.last is not None and key > version_key(self.last):
            return False
        return True


@dataclass(frozen=True)
class PropertyRule:
    """Prefix rule for a family of properties.

    ``only`` restricts a prefix to some properties and may rename them,
    e.g. ``order`` becomes ``-ms-flex-order`` for IE 10.
    """

    feature: str
    properties: tuple[str, ...]
    ranges: tuple[PrefixRange, ...]
    only: Mapping[str, Mapping[str, str]] = field(default_factory=dict)


@dataclass(frozen=True)
class ValueRule:
    """Prefixed replacement values for a ``property: value`` pair."""

    property: str
    value: str
    replacements: tuple[tuple[PrefixRange, str], ...]


def _r(agent: str, prefix: str, last: str | None, first: str | None = None) -> PrefixRange:
    return PrefixRange(agent=agent, prefix=prefix, last=last, first=first)


_FLEX_PROPERTIES = (
    "flex",
    "flex-grow",
    "flex-shrink",
    "flex-basis",
    "flex-direction",
    "flex-wrap",
    "flex-flow",
    "justify-content",
    "align-items",
    "align-self",
    "align-content",
    "order",
)

PROPERTY_RULES: tuple[PropertyRule, ...] = (
    PropertyRule(
        "transforms",
        (
            "transform",
            "transform-origin",
            "transform-style",
            "perspective",
            "perspective-origin",
            "backface-visibility",
        ),
        (
            _r("chrome", WEBKIT, "35"),
            _r("safari", WEBKIT, "8"),
            _r("ios_saf", WEBKIT, "8"),
            _r("android", WEBKIT, "4.4.4"),
            _r("opera", WEBKIT, "22", first="15"),
            _r("opera", OPERA, "12", first="11.5"),
            _r("firefox", MOZ, "15"),
            _r("ie", MS, "9", first="9"),
        ),
    ),
    PropertyRule(
        "transitions",
        (
            "transition",
            "transition-property",
            "transition-duration",
            "transition-timing-function",
            "transition-delay",
        ),
        (
            _r("chrome", WEBKIT, "25"),
            _r("safari", WEBKIT, "6"),
            _r("ios_saf", WEBKIT, "6.1"),
            _r("android", WEBKIT, "4.3"),
            _r("opera", OPERA, "12", first="10.5"),
            _r("firefox", MOZ, "15"),
        ),
    ),
    PropertyRule(
        "animations",
        (
            "animation",
            "animation-name",
            "animation-duration",
            "animation-timing-function",
            "animation-delay",
            "animation-iteration-count",
            "animation-direction",
            "animation-fill-mode",
            "animation-play-state",
        ),
        (
            _r("chrome", WEBKIT, "42"),
            _r("safari", WEBKIT, "8"),
            _r("ios_saf", WEBKIT, "8"),
            _r("android", WEBKIT, "4.4.4"),
            _r("opera", WEBKIT, "29", first="15"),
            _r("opera", OPERA, "12", first="12"),
            _r("firefox", MOZ, "15"),
        ),
    ),
    PropertyRule(
        "flexbox",
        _FLEX_PROPERTIES,
        (
            _r("chrome", WEBKIT, "28", first="21"),
            _r("safari", WEBKIT, "8", first="6.1"),
            _r("ios_saf", WEBKIT, "8", first="7"),
            _r("opera", WEBKIT, "16", first="15"),
            _r("ie", MS, "10", first="10"),
        ),
        only={
            MS: {
                "flex": "-ms-flex",
                "order": "-ms-flex-order",
                "flex-direction": "-ms-flex-direction",
                "flex-wrap": "-ms-flex-wrap",
                "flex-flow": "-ms-flex-flow",
            }
        },
    ),
    PropertyRule(
        "user-select",
        ("user-select",),
        (
            _r("chrome", WEBKIT, "53"),
            _r("safari", WEBKIT, None),
            _r("ios_saf", WEBKIT, None),
            _r("android", WEBKIT, "4.4.4"),
            _r("firefox", MOZ, "68"),
            _r("ie", MS, "11", first="10"),
            _r("edge", MS, "18"),
        ),
    ),
    PropertyRule(
        "appearance",
        ("appearance",),
        (
            _r("chrome", WEBKIT, "83"),
            _r("safari", WEBKIT, "15.3"),
            _r("ios_saf", WEBKIT, "15.3"),
            _r("android", WEBKIT, "4.4.4"),
            _r("firefox", MOZ, "79"),
        ),
    ),
    PropertyRule(
        "box-sizing",
        ("box-sizing",),
        (
            _r("chrome", WEBKIT, "9"),
            _r("safari", WEBKIT, "5"),
            _r("ios_saf", WEBKIT, "4.3"),
            _r("android", WEBKIT, "3"),
            _r("firefox", MOZ, "28"),
        ),
    ),
    PropertyRule(
        "border-radius",
        ("border-radius", "box-shadow"),
        (
            _r("chrome", WEBKIT, "4"),
            _r("safari", WEBKIT, "4"),
            _r("ios_saf", WEBKIT, "3.2"),
            _r("android", WEBKIT, "2.1"),
            _r("firefox", MOZ, "3.6"),
        ),
    ),
    PropertyRule(
        "backdrop-filter",
        ("backdrop-filter",),
        (
            _r("safari", WEBKIT, None),
            _r("ios_saf", WEBKIT, None),
        ),
    ),
    PropertyRule(
        "hyphens",
        ("hyphens",),
        (
            _r("safari", WEBKIT, "17.3"),
            _r("ios_saf", WEBKIT, "17.3"),
            _r("firefox", MOZ, "42"),
            _r("ie", MS, "11", first="10"),
            _r("edge", MS, "18"),
        ),
    ),
    PropertyRule(
        "text-size-adjust",
        ("text-size-adjust",),
        (
            _r("ios_saf", WEBKIT, None),
            _r("edge", MS, "18"),
        ),
    ),
    PropertyRule(
        "multicolumn",
        (
            "columns",
            "column-count",
            "column-gap",
            "column-rule",
            "column-width",
            "column-span",
            "column-fill",
        ),
        (
            _r("chrome", WEBKIT, "49"),
            _r("safari", WEBKIT, "8"),
            _r("ios_saf", WEBKIT, "8"),
            _r("android", WEBKIT, "4.4.4"),
            _r("opera", WEBKIT, "36", first="15"),
            _r("firefox", MOZ, "51"),
        ),
    ),
)

_OLD_FLEXBOX = (
    _r("chrome", WEBKIT, "20", first="4"),
    _r("safari", WEBKIT, "6", first="3.1"),
    _r("ios_saf", WEBKIT, "6.1", first="3.2"),
    _r("android", WEBKIT, "4.3", first="2.1"),
)
_WEBKIT_FLEXBOX = (
    _r("chrome", WEBKIT, "28", first="21"),
    _r("safari", WEBKIT, "8", first="6.1"),
    _r("ios_saf", WEBKIT, "8", first="7"),
    _r("opera", WEBKIT, "16", first="15"),
)
_IE_FLEXBOX = (_r("ie", MS, "10", first="10"),)

VALUE_RULES: tuple[ValueRule, ...] = (
    ValueRule(
        "display",
        "flex",
        tuple((item, "-webkit-box") for item in _OLD_FLEXBOX)
        + tuple((item, "-webkit-flex") for item in _WEBKIT_FLEXBOX)
        + tuple((item, "-ms-flexbox") for item in _IE_FLEXBOX),
    ),
    ValueRule(
        "display",
        "inline-flex",
        tuple((item, "-webkit-inline-box") for item in _OLD_FLEXBOX)
        + tuple((item, "-webkit-inline-flex") for item in _WEBKIT_FLEXBOX)
        + tuple((item, "-ms-inline-flexbox") for item in _IE_FLEXBOX),
    ),
)

RULES_BY_PROPERTY: Mapping[str, PropertyRule] = {
    prop: rule for rule in PROPERTY_RULES for prop in rule.properties
}


def _any_match(ranges: Iterable[PrefixRange], targets: frozenset[BrowserTarget]) -> set[str]:
    return {item.prefix for item in ranges for target in targets if item.matches(target)}


def property_variants(
    prop: str, targets: frozenset[BrowserTarget]
) -> list[tuple[str, str]]:
    """Return ``(prefix, prefixed property)`` pairs needed for ``prop``.

    Parameters
    ----------
    prop : str
        Unprefixed, lower-case property name.
    targets : frozenset[BrowserTarget]
        Resolved browser targets.

    Returns
    -------
    list[tuple[str, str]]
        Variants in :data:`PREFIX_ORDER`.
    """
    rule = RULES_BY_PROPERTY.get(prop)
    if rule is None:
        return []
    needed = _any_match(rule.ranges, targets)
    variants: list[tuple[str, str]] = []
    for prefix in PREFIX_ORDER:
        if prefix not in needed:
            continue
        if prefix in rule.only:
            renamed = rule.only[prefix].get(prop)
            if renamed is None:
                continue
            variants.append((prefix, renamed))
        else:
            variants.append((prefix, f"{prefix}{prop}"))
    return variants


def value_variants(
    prop: str, value: str, targets: frozenset[BrowserTarget]
) -> list[str]:
    """Return prefixed replacement values for ``prop: value``, in rule order."""
    wanted = value.strip().lower()
    variants: list[str] = []
    for rule in VALUE_RULES:
        if rule.property != prop or rule.value != wanted:
            continue
        for item, replacement in rule.replacements:
            if replacement in variants:
                continue
            if any(item.matches(target) for target in targets):
                variants.append(replacement)
    return variants
