"""Sprite assembly and output.

Joins the symbol fragments into one SVG document, shared definitions first,
and writes it over the previous sprite.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from icon_sprite.constants import (
    DEFS_CLOSE,
    DEFS_OPEN,
    SPRITE_ROOT_CLOSE,
    SPRITE_ROOT_OPEN,
    XML_DECLARATION,
)
from icon_sprite.exceptions import DestinationWriteError, chain_exception
from icon_sprite.utils import file_utils

logger = logging.getLogger(__name__)


def assemble(symbol_bodies: Iterable[str], defs_chunks: Iterable[str]) -> str:
    """Build the sprite document.

    Args:
        symbol_bodies: Symbol markup in output order.
        defs_chunks: Inner defs markup per icon; empty chunks are ignored.

    Returns:
        The complete document. The ``<defs>`` wrapper is only present when at
        least one chunk is non-empty, and always precedes the symbols.
    """
    defs = "".join(chunk for chunk in defs_chunks if chunk)

    lines = [XML_DECLARATION, SPRITE_ROOT_OPEN]
    if defs:
        lines.append(f"{DEFS_OPEN}{defs}{DEFS_CLOSE}")
    lines.extend(symbol_bodies)
    lines.append(SPRITE_ROOT_CLOSE)

    return "\n".join(lines) + "\n"


def write_sprite(content: str, destination: Path, atomic: bool = True) -> Path:
    """Write the sprite, replacing any previous file.

    Args:
        content: Assembled document.
        destination: Target path; missing parent directories are created.
        atomic: Write through a temporary file and rename it into place.

    Returns:
        The destination path.

    Raises:
        DestinationWriteError: If the directory or file cannot be written.
    """
    try:
        if atomic:
            file_utils.atomic_write(destination, content)
        else:
            file_utils.write_text(destination, content)
    except OSError as e:
        raise chain_exception(
            DestinationWriteError(
                "Failed to write sprite", {"path": str(destination), "error": str(e)}
            ),
            e,
        ) from e

    logger.info(f"Wrote sprite to {destination}")
    return destination
