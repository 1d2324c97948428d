"""Symbol transformation and defs extraction.

These are plain substring rewrites, not an XML parse: icons are expected to
be single-root SVG documents with at most one ``<defs>`` block, which is what
optimized icon sets look like.
"""

import re
from pathlib import Path

from icon_sprite.constants import (
    DEFAULT_ID_PREFIX,
    ICON_CLASS_PREFIX,
    VENDOR_CLASS_PREFIX,
    VENDOR_CLASS_TOKEN,
)
from icon_sprite.exceptions import MalformedSymbolError
from icon_sprite.models.icon import IconName, SymbolFragment

SVG_OPEN_TAG = re.compile(r"<svg(?=[\s/>])")
SVG_CLOSE_TAG = "</svg>"
SYMBOL_CLOSE_TAG = "</symbol>"

# Greedy: first <defs> to last </defs>
DEFS_BLOCK = re.compile(r"<defs(?:\s[^>]*)?>(.*)</defs>", re.DOTALL)
# Opening tags only; self-closing <defs/> is ignored
DEFS_OPEN_TAG = re.compile(r"<defs(?:\s[^>]*)?(?<!/)>")

_ROOT_ID_ATTRIBUTE = re.compile(r"""\s+id\s*=\s*(?:"[^"]*"|'[^']*')""")


def to_symbol(slug: str, content: str, prefix: str = DEFAULT_ID_PREFIX) -> str:
    """Rewrite an SVG document into a ``<symbol>`` fragment.

    The first ``<svg`` opening tag becomes ``<symbol id="{prefix}{slug}"`` and
    the last ``</svg>`` becomes ``</symbol>``; nested ``<svg>`` elements are
    kept. Anything outside the root element (XML declaration, doctype,
    comments) is dropped, as is an ``id`` already present on the root.
    Finally the Feather class markers are cleaned up: ``"feather "`` is removed
    and ``"feather-"`` becomes ``"icon-"``.

    Args:
        slug: Normalized icon name.
        content: Full SVG document.
        prefix: Symbol id prefix.

    Returns:
        Markup starting with ``<symbol`` and ending with ``</symbol>``.

    Raises:
        MalformedSymbolError: If the root opening or closing tag is missing.
    """
    symbol_id = f"{prefix}{slug}"

    opening = SVG_OPEN_TAG.search(content)
    if opening is None:
        raise MalformedSymbolError("No <svg> opening tag found", {"symbol_id": symbol_id})

    closing = content.rfind(SVG_CLOSE_TAG)
    if closing < opening.end():
        raise MalformedSymbolError("No </svg> closing tag found", {"symbol_id": symbol_id})

    tag_end = content.find(">", opening.end(), closing)
    if tag_end == -1:
        raise MalformedSymbolError("Unterminated <svg> opening tag", {"symbol_id": symbol_id})

    attributes = _ROOT_ID_ATTRIBUTE.sub("", content[opening.end() : tag_end])
    inner = content[tag_end:closing]

    # Cleanup runs before the id is inserted so slugs like "feather-x" survive
    markup = f"{attributes}{inner}".replace(VENDOR_CLASS_TOKEN, "")
    markup = markup.replace(VENDOR_CLASS_PREFIX, ICON_CLASS_PREFIX)

    return f'<symbol id="{symbol_id}"{markup}{SYMBOL_CLOSE_TAG}'


def extract_defs(content: str) -> str:
    """Return the inner markup of the ``<defs>`` block.

    Matching is greedy, so several blocks in one document come back as a
    single capture spanning all of them.

    Args:
        content: SVG or symbol markup.

    Returns:
        The markup between ``<defs>`` and ``</defs>``, or "" if there is none.
    """
    match = DEFS_BLOCK.search(content)
    return match.group(1) if match else ""


def strip_defs(content: str) -> str:
    """Remove the ``<defs>`` block matched by :func:`extract_defs`.

    Args:
        content: SVG or symbol markup.

    Returns:
        The markup without its defs block.
    """
    return DEFS_BLOCK.sub("", content, count=1)


def build_fragment(
    name: IconName,
    content: str,
    prefix: str = DEFAULT_ID_PREFIX,
    hoist_defs: bool = True,
    source: Path | None = None,
) -> SymbolFragment:
    """Transform one icon into a symbol fragment.

    Args:
        name: Icon name derived from the filename.
        content: Full (optimized) SVG document.
        prefix: Symbol id prefix.
        hoist_defs: Remove the defs block from the body once extracted, so
            definitions appear only in the sprite's shared ``<defs>``.
        source: Path the content was read from, kept for error reporting.

    Returns:
        The fragment.

    Raises:
        MalformedSymbolError: If the root is unusable or the icon has more than
            one ``<defs>`` block, which the greedy extraction cannot separate
            from the markup between them.
    """
    body = to_symbol(name.slug, content, prefix)

    defs_blocks = len(DEFS_OPEN_TAG.findall(body))
    if defs_blocks > 1:
        raise MalformedSymbolError(
            "Icon has more than one <defs> block",
            {"symbol_id": name.symbol_id(prefix), "defs_blocks": defs_blocks},
        )

    defs = extract_defs(body)

    if hoist_defs:
        body = strip_defs(body)

    return SymbolFragment(
        symbol_id=name.symbol_id(prefix),
        body=body,
        defs=defs,
        source=source,
    )
