"""Icon data models for the sprite compiler.

Defines Pydantic models for the units that flow through a compile run: the
source files found on disk, the names derived from them, the per-icon symbol
fragments and the assembled sprite document.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class IconSource(BaseModel):
    """One candidate input file discovered in the source directory."""

    model_config = ConfigDict(frozen=True)

    path: Path
    content_type: str

    @property
    def filename(self) -> str:
        """Filename including extension."""
        return self.path.name


class IconName(BaseModel):
    """Name derived from an icon filename."""

    model_config = ConfigDict(frozen=True)

    stem: str  # Filename without extension, as found on disk
    slug: str  # Normalized, URL-safe form

    def symbol_id(self, prefix: str) -> str:
        """Build the fragment id for this name.

        Args:
            prefix: Symbol id prefix, e.g. "i-"

        Returns:
            The symbol id referenced as ``#{prefix}{slug}``.
        """
        return f"{prefix}{self.slug}"


class SymbolFragment(BaseModel):
    """A single icon rewritten as a ``<symbol>`` element."""

    model_config = ConfigDict(frozen=True)

    symbol_id: str
    body: str  # Full <symbol ...>...</symbol> markup
    defs: str = ""  # Inner markup of the icon's <defs> block, empty when absent
    source: Path | None = None

    @property
    def size_bytes(self) -> int:
        """Approximate in-memory size, used for cache accounting."""
        return len(self.body.encode("utf-8")) + len(self.defs.encode("utf-8"))


class SpriteDocument(BaseModel):
    """The assembled sprite and the fragments it was built from."""

    model_config = ConfigDict(frozen=True)

    fragments: list[SymbolFragment] = Field(default_factory=list)
    content: str
    output_path: Path | None = None

    @property
    def symbol_ids(self) -> list[str]:
        """Symbol ids in document order."""
        return [fragment.symbol_id for fragment in self.fragments]
