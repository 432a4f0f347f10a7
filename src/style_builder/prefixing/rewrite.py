"""Insert vendor-prefixed declarations into compiled CSS text."""

from __future__ import annotations

import re
from collections.abc import Collection, Iterator

from style_builder.prefixing.features import property_variants, value_variants
from style_builder.types import BrowserTarget

_BLOCK_RE = re.compile(r"\{(?P<body>[^{}]*)\}")
_DECLARATION_RE = re.compile(
    r"^(?P<before>\s*)(?P<prop>-?[A-Za-z][A-Za-z0-9-]*)(?P<sep>\s*:\s*)"
    r"(?P<value>.*?)(?P<after>\s*)$",
    re.S,
)
_IMPORTANT_RE = re.compile(r"\s*!\s*important$", re.I)
_KEYFRAMES_RE = re.compile(r"@keyframes\s+(?P<name>[^\s{]+)\s*\{", re.I)
_TRANSITION_ITEM_RE = re.compile(r"^(?P<lead>\s*)(?P<name>[A-Za-z-]+)(?P<rest>.*)$", re.S)

TRANSITION_PROPERTIES = frozenset({"transition", "transition-property"})


def _split_top_level(text: str, separator: str) -> list[str]:
    chunks: list[str] = []
    depth = 0
    quote: str | None = None
    start = 0
    escaped = False
    for index, char in enumerate(text):
        if quote is not None:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
        elif char in "\"'":
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth = max(depth - 1, 0)
        elif char == separator and depth == 0:
            chunks.append(text[start:index])
            start = index + 1
    chunks.append(text[start:])
    return chunks


def split_declarations(body: str) -> list[str]:
    """Split a block body on top-level ``;``, keeping surrounding whitespace.

    Semicolons inside strings or parentheses (``url(data:...)``) do not
    split. The last chunk holds whatever follows the final semicolon.
    """
    return _split_top_level(body, ";")


def _normalize(value: str) -> str:
    return " ".join(value.lower().split())


def prefix_transition_value(
    value: str, prefix: str, targets: frozenset[BrowserTarget]
) -> str:
    """Prefix the property names listed in a transition value.

    ``transition: transform 1s`` written for ``-webkit-`` becomes
    ``-webkit-transform 1s`` when some target needs ``-webkit-transform``.
    Names without a rule for ``prefix`` are left alone.
    """
    items: list[str] = []
    for item in _split_top_level(value, ","):
        found = _TRANSITION_ITEM_RE.match(item)
        if found is not None:
            renamed = dict(property_variants(found.group("name").lower(), targets))
            if prefix in renamed:
                item = f"{found.group('lead')}{renamed[prefix]}{found.group('rest')}"
        items.append(item)
    return ",".join(items)


def _expand(
    match: re.Match[str],
    targets: frozenset[BrowserTarget],
    cascade: bool,
    present: set[tuple[str, str]],
    prefixes: Collection[str] | None,
) -> tuple[list[str], str]:
    before = match.group("before")
    prop = match.group("prop").lower()
    sep = match.group("sep")
    value = match.group("value")
    original = match.group(0)

    present_props = {name for name, _ in present}
    variants = [
        (prefix, name)
        for prefix, name in property_variants(prop, targets)
        if name not in present_props and (prefixes is None or prefix in prefixes)
    ]

    important_match = _IMPORTANT_RE.search(value)
    core = value[: important_match.start()] if important_match else value
    important = value[important_match.start():] if important_match else ""
    replacements = [
        replacement
        for replacement in value_variants(prop, core, targets)
        if (prop, _normalize(replacement + important)) not in present
        and (prefixes is None or replacement.startswith(tuple(prefixes)))
    ]

    width = 0
    if cascade and "\n" in before and variants:
        width = max(len(prefix) for prefix, _ in variants)

    declarations = []
    for prefix, name in variants:
        variant_value = value
        if prop in TRANSITION_PROPERTIES:
            variant_value = prefix_transition_value(value, prefix, targets)
        declarations.append(
            f"{before}{' ' * (width - len(prefix))}{name}{sep}{variant_value}"
        )
    declarations.extend(
        f"{before}{match.group('prop')}{sep}{replacement}{important}"
        for replacement in replacements
    )
    if width:
        original = f"{before}{' ' * width}{original[len(before):]}"
    return declarations, original


def prefix_block(
    body: str,
    targets: frozenset[BrowserTarget],
    *,
    cascade: bool = False,
    prefixes: Collection[str] | None = None,
) -> str:
    """Return ``body`` with prefixed declarations inserted.

    Each prefixed declaration is placed before the declaration it derives
    from and reuses its leading whitespace, so a multi-line block gets one
    declaration per line. With ``cascade`` the property names of a prefixed
    group are right-aligned. Prefixed forms already present in the block are
    not added again. ``prefixes`` limits the inserted forms to those vendor
    prefixes.
    """
    chunks = split_declarations(body)
    matches = [_DECLARATION_RE.match(chunk) for chunk in chunks]
    present = {
        (found.group("prop").lower(), _normalize(found.group("value")))
        for found in matches
        if found is not None
    }

    parts: list[str] = []
    last = len(chunks) - 1
    for index, (chunk, found) in enumerate(zip(chunks, matches, strict=True)):
        terminator = ";" if index < last else ""
        if found is None:
            parts.append(chunk + terminator)
            continue
        declarations, original = _expand(found, targets, cascade, present, prefixes)
        parts.extend(f"{declaration};" for declaration in declarations)
        parts.append(original + terminator)
    return "".join(parts)


def _prefix_blocks(
    css: str,
    targets: frozenset[BrowserTarget],
    cascade: bool,
    prefixes: Collection[str] | None = None,
) -> str:
    def _rewrite(match: re.Match[str]) -> str:
        body = prefix_block(
            match.group("body"), targets, cascade=cascade, prefixes=prefixes
        )
        return "{" + body + "}"

    return _BLOCK_RE.sub(_rewrite, css)


def _block_end(css: str, open_index: int) -> int:
    depth = 0
    for index in range(open_index, len(css)):
        if css[index] == "{":
            depth += 1
        elif css[index] == "}":
            depth -= 1
            if depth == 0:
                return index + 1
    return len(css)


def _keyframes_blocks(css: str) -> Iterator[tuple[int, int, str]]:
    position = 0
    while found := _KEYFRAMES_RE.search(css, position):
        end = _block_end(css, found.end() - 1)
        yield found.start(), end, found.group("name")
        position = end


def _has_keyframes(css: str, prefix: str, name: str) -> bool:
    pattern = rf"@{re.escape(prefix)}keyframes\s+{re.escape(name)}(?=[\s{{])"
    return re.search(pattern, css, re.I) is not None


def prefix_css(
    css: str, targets: frozenset[BrowserTarget], *, cascade: bool = False
) -> str:
    """Prefix every innermost rule block of ``css`` for ``targets``.

    Each ``@keyframes`` block is preceded by a copy under every vendor
    prefix the targets need for ``animation``, unless the stylesheet
    already declares that copy. Declarations inside a copy only get the
    copy's own prefix.
    """
    if not targets:
        return css

    animation_prefixes = [prefix for prefix, _ in property_variants("animation", targets)]
    parts: list[str] = []
    position = 0
    for start, end, name in _keyframes_blocks(css):
        parts.append(_prefix_blocks(css[position:start], targets, cascade))
        block = css[start:end]
        line_start = css.rfind("\n", 0, start) + 1
        indent = css[line_start:start]
        separator = f"\n{indent}" if not indent.strip() else ""
        for prefix in animation_prefixes:
            if _has_keyframes(css, prefix, name):
                continue
            copy = f"@{prefix}{block[1:]}"
            parts.append(_prefix_blocks(copy, targets, cascade, prefixes=(prefix,)))
            parts.append(separator)
        parts.append(_prefix_blocks(block, targets, cascade))
        position = end
    parts.append(_prefix_blocks(css[position:], targets, cascade))
    return "".join(parts)
