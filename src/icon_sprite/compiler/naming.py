"""Icon name normalization.

Maps an icon filename to the slug used in its fragment id. The mapping is a
flat namespace: only the filename is considered, never its directory.
"""

import re
import unicodedata

from icon_sprite.constants import SLUG_SEPARATOR
from icon_sprite.exceptions import InvalidIconNameError
from icon_sprite.models.icon import IconName

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


def split_extension(filename: str) -> tuple[str, str]:
    """Split a filename into stem and extension at the last dot.

    Unlike ``pathlib``, a leading dot counts as an extension separator, so
    ``".svg"`` has an empty stem and the extension ``"svg"``.

    Args:
        filename: Filename without directory components

    Returns:
        Tuple of (stem, extension); the extension is empty when there is no dot.
    """
    stem, dot, extension = filename.rpartition(".")
    if not dot:
        return filename, ""
    return stem, extension


def slugify(text: str) -> str:
    """Convert arbitrary text into a lower-case, URL-safe slug.

    Accented characters are folded to ASCII, "@" reads as "at", and every run
    of other non-alphanumeric characters becomes a single separator. Leading
    and trailing separators are trimmed. Applying it twice changes nothing.

    Args:
        text: Text to convert

    Returns:
        The slug, possibly empty.
    """
    ascii_text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    ascii_text = ascii_text.replace("@", f"{SLUG_SEPARATOR}at{SLUG_SEPARATOR}").lower()
    return _NON_ALPHANUMERIC.sub(SLUG_SEPARATOR, ascii_text).strip(SLUG_SEPARATOR)


def normalize_name(filename: str) -> IconName:
    """Derive the icon name for a source filename.

    Args:
        filename: Raw filename including extension, e.g. "Arrow Left.svg"

    Returns:
        IconName with the original stem and its slug ("arrow-left").

    Raises:
        InvalidIconNameError: If the stem produces an empty slug.
    """
    stem, _ = split_extension(filename)
    slug = slugify(stem)

    if not slug:
        raise InvalidIconNameError(
            "Icon filename produces an empty name",
            {"filename": filename},
        )

    return IconName(stem=stem, slug=slug)
