"""CSS minifier adapter."""

from __future__ import annotations

import rcssmin

from style_builder.errors import MinifyError


class RcssminMinifier:
    """Minify CSS with ``rcssmin``.

    ``/*! ... */`` license comments are dropped unless ``keep_bang_comments``.
    """

    def __init__(self, keep_bang_comments: bool = False) -> None:
        self.keep_bang_comments = keep_bang_comments

    def minify(self, css: str) -> str:
        """Return minified ``css``."""
        try:
            minified = rcssmin.cssmin(css, keep_bang_comments=self.keep_bang_comments)
        except Exception as exc:
            raise MinifyError(f"CSS minification failed: {exc}") from exc
        if len(minified) > len(css):
            raise MinifyError("Minified output is larger than its input.")
        return minified
