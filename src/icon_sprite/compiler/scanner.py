"""Source scanning and SVG filtering.

Lists the files of the icon source directory and keeps only those that are
SVG both by extension and by content. Anything else is skipped silently (at
debug level) so that icon directories can hold READMEs, previews and the like.
"""

import codecs
import logging
import unicodedata
from collections.abc import Callable, Iterator
from pathlib import Path

from icon_sprite.compiler.naming import split_extension
from icon_sprite.constants import (
    ALLOWED_CONTENT_TYPES,
    SNIFF_BYTES,
    SVG_EXTENSION,
    UNKNOWN_CONTENT_TYPE,
)
from icon_sprite.exceptions import SourceUnreadableError, chain_exception
from icon_sprite.models.icon import IconSource
from icon_sprite.utils import file_utils

logger = logging.getLogger(__name__)

ContentTypeSniffer = Callable[[Path], str]

_HTML_MARKERS = ("<!doctype html", "<html", "<head", "<body")
_TEXT_CONTROL_CHARS = "\t\r\n\f"


def _is_text_char(ch: str) -> bool:
    """Whether a character can appear in a text file.

    ``str.isprintable`` rejects space separators other than U+0020, such as
    the no-break space, so category Zs is accepted explicitly.
    """
    return ch.isprintable() or ch in _TEXT_CONTROL_CHARS or unicodedata.category(ch) == "Zs"


def sniff_content_type(path: Path) -> str:
    """Guess a file's MIME type from its leading bytes.

    Only distinguishes what the filter cares about: SVG markup, HTML, other
    text, and binary data. Text-based SVG is easily mistaken for HTML or
    plain text by other detectors, which is why the filter accepts all three.

    Args:
        path: File to inspect

    Returns:
        "image/svg+xml", "text/html", "text/plain", "application/x-empty"
        or "application/octet-stream".

    Raises:
        OSError: If the file cannot be read.
    """
    head = file_utils.read_head(path, SNIFF_BYTES)

    if not head:
        return "application/x-empty"
    if b"\x00" in head:
        return UNKNOWN_CONTENT_TYPE

    # Incremental decoding tolerates a multi-byte character cut off at SNIFF_BYTES
    try:
        text = codecs.getincrementaldecoder("utf-8-sig")().decode(head, final=False)
    except UnicodeDecodeError:
        return UNKNOWN_CONTENT_TYPE

    lowered = text.lstrip().lower()
    if "<svg" in lowered:
        return "image/svg+xml"
    if lowered.startswith(_HTML_MARKERS):
        return "text/html"
    if all(_is_text_char(ch) for ch in text):
        return "text/plain"
    return UNKNOWN_CONTENT_TYPE


def has_svg_extension(path: Path) -> bool:
    """Check the file extension case-insensitively.

    Args:
        path: File path

    Returns:
        True for "icon.svg", "icon.SVG" and ".svg".
    """
    _, extension = split_extension(path.name)
    return extension.lower() == SVG_EXTENSION


def is_svg_file(path: Path, content_type: str) -> bool:
    """Decide whether a file qualifies as an icon source.

    Args:
        path: File path
        content_type: Sniffed or declared MIME type

    Returns:
        True if both the extension and the content type are acceptable.
    """
    return has_svg_extension(path) and content_type in ALLOWED_CONTENT_TYPES


def scan_sources(
    source_dir: Path, sniff: ContentTypeSniffer = sniff_content_type
) -> Iterator[IconSource]:
    """Yield the qualifying icon sources of a directory in filename order.

    Sub-directories are ignored; the source layout is flat.

    Args:
        source_dir: Directory holding the icon files
        sniff: Callable returning the content type of a file

    Yields:
        IconSource for every file that passes the SVG filter.

    Raises:
        SourceUnreadableError: If the directory is missing or a file cannot be read.
    """
    try:
        candidates = file_utils.list_files(source_dir)
    except OSError as e:
        raise chain_exception(
            SourceUnreadableError(
                "Source directory cannot be read", {"path": str(source_dir), "error": str(e)}
            ),
            e,
        ) from e

    logger.info(f"Scanning {len(candidates)} files in {source_dir}")

    for path in candidates:
        if not has_svg_extension(path):
            logger.debug(f"Skipping {path.name}: not an .svg file")
            continue

        try:
            content_type = sniff(path)
        except OSError as e:
            raise chain_exception(
                SourceUnreadableError(
                    "Icon file cannot be read", {"path": str(path), "error": str(e)}
                ),
                e,
            ) from e

        if not is_svg_file(path, content_type):
            logger.debug(f"Skipping {path.name}: content type {content_type}")
            continue

        yield IconSource(path=path, content_type=content_type)
