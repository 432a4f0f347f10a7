"""LESS compiler adapter."""

from __future__ import annotations

import re
from pathlib import Path

import lesscpy

from style_builder.errors import CompileError

_LESSCPY_ERROR_RE = re.compile(
    r"^\s*(?:[EW]:\s*)?(?:(?P<file>.*?)\s+)?line:?\s*(?P<line>\d+)\s*[,:]?\s*(?P<cause>.*)$",
    re.I | re.S,
)
_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.S)
_IMPORT_RE = re.compile(
    r"""@import\s*(?:\([^)]*\)\s*)?(?P<url>url\(\s*)?["'](?P<target>[^"']+)["']"""
)


def parse_lesscpy_error(message: str) -> tuple[str, int | None]:
    """Split a lesscpy error into its cause and 1-based line.

    lesscpy prefixes errors with a severity, the file and the line, e.g.
    ``E: styles.less line: 1, Syntax Error, token: css_ident, red``. Line
    ``0`` means lesscpy did not know the line and is reported as ``None``.
    """
    found = _LESSCPY_ERROR_RE.match(message)
    if found is None:
        return message, None
    line = int(found.group("line")) or None
    return found.group("cause").strip() or message, line


def _blank_comments(text: str) -> str:
    return _BLOCK_COMMENT_RE.sub(lambda m: "\n" * m.group(0).count("\n"), text)


def check_balanced_braces(text: str, path: Path) -> None:
    """Raise if ``{``/``}`` in ``text`` do not balance.

    Braces inside strings, ``/* */`` comments and ``//`` line comments are
    ignored.

    Raises
    ------
    CompileError
        Pointing at the unmatched ``}``, or at the last unclosed ``{``.
    """
    open_braces: list[tuple[int, int]] = []
    line, column = 1, 0
    quote: str | None = None
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        column += 1
        if char == "\n":
            line, column = line + 1, 0
            quote = None
        elif quote is not None:
            if char == "\\":
                index += 1
                column += 1
            elif char == quote:
                quote = None
        elif char in "\"'":
            quote = char
        elif text.startswith("/*", index):
            end = text.find("*/", index + 2)
            end = length if end < 0 else end + 2
            chunk = text[index:end]
            newlines = chunk.count("\n")
            if newlines:
                line += newlines
                column = len(chunk) - chunk.rfind("\n") - 1
            else:
                column += len(chunk) - 1
            index = end
            continue
        elif text.startswith("//", index) and (index == 0 or text[index - 1] != ":"):
            end = text.find("\n", index)
            index = length if end < 0 else end
            continue
        elif char == "{":
            open_braces.append((line, column))
        elif char == "}":
            if not open_braces:
                raise CompileError(
                    "Unbalanced braces: unexpected '}'.",
                    path=path,
                    line=line,
                    column=column,
                )
            open_braces.pop()
        index += 1

    if open_braces:
        open_line, open_column = open_braces[-1]
        raise CompileError(
            "Unbalanced braces: '{' is never closed.",
            path=path,
            line=open_line,
            column=open_column,
        )


def _import_path(current: Path, target: str) -> Path | None:
    if target.endswith(".css") or "://" in target or target.startswith("//"):
        return None
    candidate = Path(target)
    if not candidate.suffix:
        candidate = candidate.with_suffix(".less")
    return (current.parent / candidate).resolve()


def check_sources(source_path: Path, chain: tuple[Path, ...] = ()) -> None:
    """Check ``source_path`` and every LESS file it imports.

    Each file must exist, be readable and have balanced braces; an import
    may not lead back to a file already on the import chain.

    Raises
    ------
    CompileError
        For the first problem found.
    """
    resolved = source_path.resolve()
    if not resolved.is_file():
        raise CompileError("Source stylesheet not found.", path=source_path)

    try:
        text = resolved.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CompileError(f"Cannot read source: {exc}", path=source_path) from exc

    check_balanced_braces(text, source_path)

    chain = (*chain, resolved)
    stripped = _blank_comments(text)
    for match in _IMPORT_RE.finditer(stripped):
        if match.group("url"):
            continue
        imported = _import_path(resolved, match.group("target"))
        if imported is None:
            continue
        line = stripped.count("\n", 0, match.start()) + 1
        if imported in chain:
            raise CompileError(
                f"Circular import of '{match.group('target')}'.",
                path=source_path,
                line=line,
            )
        if not imported.is_file():
            raise CompileError(
                f"Cannot import '{match.group('target')}': file not found.",
                path=source_path,
                line=line,
            )
        check_sources(imported, chain)


class LesscpyCompiler:
    """Compile LESS with ``lesscpy``.

    Imports are resolved relative to the file that declares them; the
    entry is opened by its ``str`` path because lesscpy reads the import
    base directory from the handle's name.
    """

    def __init__(self, spaces: int = 2) -> None:
        self.spaces = spaces

    def compile(self, source_path: Path) -> str:
        """Compile ``source_path`` into unminified CSS.

        Parameters
        ----------
        source_path : Path
            LESS entry file.

        Returns
        -------
        str
            Flat CSS text.

        Raises
        ------
        CompileError
            If a source is missing or malformed, or lesscpy rejects it.
        """
        check_sources(source_path)

        try:
            with open(str(source_path), encoding="utf-8") as handle:
                return lesscpy.compile(handle, minify=False, spaces=self.spaces)
        except Exception as exc:
            cause, line = parse_lesscpy_error(str(exc) or type(exc).__name__)
            raise CompileError(cause, path=source_path, line=line) from exc
