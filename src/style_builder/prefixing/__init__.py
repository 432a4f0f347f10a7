"""Vendor prefixing: browser targets, prefix rules and CSS rewriting."""

from style_builder.prefixing.browsers import (
    DEFAULT_QUERIES,
    describe_targets,
    resolve_targets,
)
from style_builder.prefixing.rewrite import prefix_css

__all__ = [
    "DEFAULT_QUERIES",
    "describe_targets",
    "prefix_css",
    "resolve_targets",
]
