"""Sprite compilation pipeline.

Drives a full compile run: scan and filter the source directory, then for
each icon optimize it, name it and turn it into a symbol fragment, and
finally assemble the sprite, write it, and copy the companion components.
Any error aborts the run before the sprite is written, so a failed compile
leaves the previous sprite in place.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from icon_sprite.compiler.assembler import assemble, write_sprite
from icon_sprite.compiler.components import materialize_components
from icon_sprite.compiler.naming import normalize_name
from icon_sprite.compiler.optimizer import SvgOptimizer, build_optimizer
from icon_sprite.compiler.scanner import ContentTypeSniffer, scan_sources, sniff_content_type
from icon_sprite.compiler.symbols import build_fragment
from icon_sprite.constants import BYTES_PER_KILOBYTE
from icon_sprite.exceptions import (
    SourceUnreadableError,
    SymbolCollisionError,
    chain_exception,
)
from icon_sprite.models.config import SpriteConfig
from icon_sprite.models.icon import IconName, IconSource, SpriteDocument, SymbolFragment
from icon_sprite.utils import file_utils
from icon_sprite.utils.cache_manager import ContentCache, content_key


class SpriteCompiler:
    """Compiles a directory of SVG icons into a symbol sprite.

    Attributes:
        config: Compiler configuration
        optimizer: In-place optimizer run on every qualifying file
        sniff: Content type detector used by the source filter
        cache: Optional fragment cache, reused across compile() calls
        logger: Logger instance
    """

    def __init__(
        self,
        config: SpriteConfig,
        optimizer: SvgOptimizer | None = None,
        sniff: ContentTypeSniffer = sniff_content_type,
        cache: ContentCache[SymbolFragment] | None = None,
    ) -> None:
        """Initialize the compiler.

        Args:
            config: Compiler configuration.
            optimizer: Optimizer to use instead of the configured one.
            sniff: Content type detector.
            cache: Cache to use instead of the configured one.
        """
        self.config = config
        self.optimizer = optimizer if optimizer is not None else build_optimizer(config.optimizer)
        self.sniff = sniff
        if cache is None and config.cache.enabled:
            cache = ContentCache(max_size_mb=config.cache.max_size_mb)
        self.cache = cache
        self.logger = logging.getLogger(__name__)

    def compile(self) -> SpriteDocument:
        """Run a full compile.

        Returns:
            The sprite document that was written.

        Raises:
            SpriteCompilerError: Any subclass, see the individual steps.
        """
        sources = scan_sources(self.config.source_dir, sniff=self.sniff)
        fragments = self.build_fragments(sources)

        content = assemble(
            (fragment.body for fragment in fragments),
            (fragment.defs for fragment in fragments),
        )
        self.logger.info(
            f"Assembled {len(fragments)} symbols "
            f"({sum(1 for f in fragments if f.defs)} with shared defs)"
        )
        if self.cache is not None:
            self.logger.debug(
                f"Fragment cache: {self.cache.hits} hits, {self.cache.misses} misses, "
                f"{self.cache.item_count} entries "
                f"({self.cache.size_bytes / BYTES_PER_KILOBYTE:.1f}KB)"
            )

        output_path = write_sprite(content, self.config.output_path, atomic=self.config.atomic_write)
        materialize_components(self.config.components)

        return SpriteDocument(fragments=fragments, content=content, output_path=output_path)

    def build_fragments(self, sources: Iterable[IconSource]) -> list[SymbolFragment]:
        """Transform every source into a fragment, rejecting duplicate ids.

        Args:
            sources: Qualifying icon sources, in output order.

        Returns:
            Fragments in the same order.

        Raises:
            InvalidIconNameError: If a filename yields an empty slug.
            SymbolCollisionError: If two files map to the same symbol id.
            OptimizationError: If the optimizer fails on a file.
            SourceUnreadableError: If an optimized file cannot be read.
            MalformedSymbolError: If a file has no usable <svg> root.
        """
        assigned: dict[str, Path] = {}
        fragments: list[SymbolFragment] = []

        for source in sources:
            name = normalize_name(source.filename)
            symbol_id = name.symbol_id(self.config.id_prefix)

            if symbol_id in assigned:
                raise SymbolCollisionError(
                    f"Duplicate symbol id {symbol_id}",
                    {"symbol_id": symbol_id, "files": [str(assigned[symbol_id]), str(source.path)]},
                )
            assigned[symbol_id] = source.path

            self.optimizer.optimize(source.path)
            fragments.append(self._fragment_for(name, source.path))

        return fragments

    def _fragment_for(self, name: IconName, path: Path) -> SymbolFragment:
        """Read an optimized icon and build (or fetch) its fragment.

        Args:
            name: Icon name.
            path: Icon file.

        Returns:
            The fragment.
        """
        try:
            content = file_utils.read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            raise chain_exception(
                SourceUnreadableError("Icon file cannot be read", {"path": str(path), "error": str(e)}),
                e,
            ) from e

        if self.cache is None:
            return build_fragment(
                name, content, self.config.id_prefix, self.config.hoist_defs, source=path
            )

        key = content_key(self.config.id_prefix, name.slug, str(self.config.hoist_defs), content)
        cached = self.cache.get(key)
        if cached is not None:
            self.logger.debug(f"Cache hit for {path.name}")
            return cached.model_copy(update={"source": path})

        fragment = build_fragment(
            name, content, self.config.id_prefix, self.config.hoist_defs, source=path
        )
        self.cache.put(key, fragment, fragment.size_bytes)
        return fragment


def compile_sprite(config: SpriteConfig, optimizer: SvgOptimizer | None = None) -> SpriteDocument:
    """Compile a sprite in one call.

    Args:
        config: Compiler configuration.
        optimizer: Optional optimizer override.

    Returns:
        The sprite document that was written.
    """
    return SpriteCompiler(config, optimizer=optimizer).compile()
