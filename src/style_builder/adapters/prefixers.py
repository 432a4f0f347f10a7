"""Autoprefixer adapter."""

from __future__ import annotations

from style_builder.errors import PrefixError
from style_builder.prefixing import prefix_css, resolve_targets
from style_builder.schemas import PrefixOptions


class AutoPrefixer:
    """Prefix CSS for the browsers selected by ``PrefixOptions``."""

    def prefix(self, css: str, options: PrefixOptions) -> str:
        """Return ``css`` with vendor-prefixed declarations added.

        Parameters
        ----------
        css : str
            Compiled CSS.
        options : PrefixOptions
            Browser queries (``None`` for the default policy) and cascade flag.

        Raises
        ------
        PrefixError
            If targets cannot be resolved or rewriting fails.
        """
        try:
            targets = resolve_targets(options.browsers)
            return prefix_css(css, targets, cascade=options.cascade)
        except Exception as exc:
            raise PrefixError(f"Vendor prefixing failed: {exc}") from exc
