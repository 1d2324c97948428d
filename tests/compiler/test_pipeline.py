"""Tests for the sprite compilation pipeline."""

import logging
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from icon_sprite.compiler.pipeline import SpriteCompiler, compile_sprite
from icon_sprite.exceptions import (
    InvalidIconNameError,
    MalformedSymbolError,
    OptimizationError,
    SymbolCollisionError,
)
from icon_sprite.models.config import CacheConfig, ComponentConfig, SpriteConfig
from icon_sprite.utils.cache_manager import ContentCache


class TestSpriteCompiler:
    """Test end-to-end compilation."""

    def test_end_to_end(self, sprite_config: SpriteConfig, recording_optimizer: Any):
        """Test the two-icon scenario from a clean source directory."""
        document = SpriteCompiler(sprite_config, optimizer=recording_optimizer).compile()

        output = sprite_config.output_path.read_text(encoding="utf-8")
        assert output == document.content
        assert output.startswith('<?xml version="1.0" encoding="UTF-8"?>\n<svg version="1.1"')
        assert '<defs><clipPath id="c"/></defs>' in output
        assert '<symbol id="i-home"><path d="M0 0"/></symbol>' in output
        assert '<symbol id="i-user"><circle/></symbol>' in output
        assert output.index("<defs>") < output.index('id="i-home"') < output.index('id="i-user"')
        assert output.count('<clipPath id="c"/>') == 1
        assert document.symbol_ids == ["i-home", "i-user"]
        assert document.output_path == sprite_config.output_path

    def test_optimizer_called_once_per_file_before_reading(
        self, sprite_config: SpriteConfig, recording_optimizer: Any
    ):
        """Test that the optimized content is what gets transformed."""
        recording_optimizer.rewrite = lambda content: content.replace("<path", '<path fill="none"')

        SpriteCompiler(sprite_config, optimizer=recording_optimizer).compile()

        assert [p.name for p in recording_optimizer.calls] == ["home.svg", "user.svg"]
        output = sprite_config.output_path.read_text(encoding="utf-8")
        assert '<path fill="none" d="M0 0"/>' in output

    def test_non_svg_files_are_skipped(
        self, sprite_config: SpriteConfig, recording_optimizer: Any
    ):
        """Test that other files in the directory are ignored."""
        (sprite_config.source_dir / "README.md").write_text("# icons", encoding="utf-8")
        (sprite_config.source_dir / "broken.svg").write_bytes(b"\x00\xff")

        document = SpriteCompiler(sprite_config, optimizer=recording_optimizer).compile()

        assert document.symbol_ids == ["i-home", "i-user"]
        assert len(recording_optimizer.calls) == 2

    def test_rerun_is_idempotent(self, sprite_config: SpriteConfig, recording_optimizer: Any):
        """Test that compiling twice gives identical output."""
        compiler = SpriteCompiler(sprite_config, optimizer=recording_optimizer)
        first = compiler.compile().content
        second = compiler.compile().content

        assert first == second
        assert sprite_config.output_path.read_text(encoding="utf-8") == second

    def test_output_replaced_not_merged(
        self, sprite_config: SpriteConfig, recording_optimizer: Any
    ):
        """Test that removed icons disappear from the next sprite."""
        compiler = SpriteCompiler(sprite_config, optimizer=recording_optimizer)
        compiler.compile()
        (sprite_config.source_dir / "user.svg").unlink()

        document = compiler.compile()

        output = sprite_config.output_path.read_text(encoding="utf-8")
        assert document.symbol_ids == ["i-home"]
        assert "i-user" not in output
        assert "<defs" not in output

    def test_custom_prefix(self, sprite_config: SpriteConfig, recording_optimizer: Any):
        """Test that the configured prefix is used for every symbol."""
        config = sprite_config.model_copy(update={"id_prefix": "icon-"})

        document = SpriteCompiler(config, optimizer=recording_optimizer).compile()

        assert document.symbol_ids == ["icon-home", "icon-user"]

    def test_slug_collision_is_fatal(
        self, sprite_config: SpriteConfig, recording_optimizer: Any
    ):
        """Test that two files with the same slug abort the run."""
        (sprite_config.source_dir / "Home.svg").write_text("<svg></svg>", encoding="utf-8")

        with pytest.raises(SymbolCollisionError) as exc_info:
            SpriteCompiler(sprite_config, optimizer=recording_optimizer).compile()

        assert exc_info.value.details["symbol_id"] == "i-home"
        assert len(exc_info.value.details["files"]) == 2
        assert not sprite_config.output_path.exists()

    def test_malformed_icon_is_fatal(
        self, sprite_config: SpriteConfig, recording_optimizer: Any
    ):
        """Test that an icon without an svg root aborts the run."""
        (sprite_config.source_dir / "bad.svg").write_text("just text", encoding="utf-8")

        with pytest.raises(MalformedSymbolError):
            SpriteCompiler(sprite_config, optimizer=recording_optimizer).compile()

        assert not sprite_config.output_path.exists()

    def test_empty_name_is_fatal(self, sprite_config: SpriteConfig, recording_optimizer: Any):
        """Test that a file named '.svg' is rejected."""
        (sprite_config.source_dir / ".svg").write_text("<svg></svg>", encoding="utf-8")

        with pytest.raises(InvalidIconNameError):
            SpriteCompiler(sprite_config, optimizer=recording_optimizer).compile()

    def test_optimizer_failure_keeps_previous_sprite(self, sprite_config: SpriteConfig):
        """Test that an optimizer error aborts without touching the output."""
        sprite_config.output_path.parent.mkdir(parents=True)
        sprite_config.output_path.write_text("previous", encoding="utf-8")
        optimizer = MagicMock()
        optimizer.optimize.side_effect = OptimizationError("SVG optimizer failed")

        with pytest.raises(OptimizationError):
            SpriteCompiler(sprite_config, optimizer=optimizer).compile()

        assert sprite_config.output_path.read_text(encoding="utf-8") == "previous"

    def test_empty_source_directory(self, tmp_path: Path, recording_optimizer: Any):
        """Test that an empty directory produces an empty sprite."""
        src = tmp_path / "empty"
        src.mkdir()
        config = SpriteConfig(source_dir=src, output_path=tmp_path / "sprite.svg")

        document = SpriteCompiler(config, optimizer=recording_optimizer).compile()

        assert document.fragments == []
        assert "<symbol" not in document.content

    def test_components_are_materialized(
        self, sprite_config: SpriteConfig, recording_optimizer: Any, tmp_path: Path
    ):
        """Test that configured components are copied after the sprite."""
        destination = tmp_path / "views" / "icon.html.j2"
        config = sprite_config.model_copy(
            update={"components": [ComponentConfig(destination=destination)]}
        )

        SpriteCompiler(config, optimizer=recording_optimizer).compile()

        assert destination.exists()
        assert sprite_config.output_path.exists()

    def test_configured_optimizer_is_used(
        self, sprite_config: SpriteConfig, mock_subprocess_run: MagicMock
    ):
        """Test that an enabled optimizer runs svgo for each icon."""
        config = sprite_config.model_copy(
            update={"optimizer": sprite_config.optimizer.model_copy(update={"enabled": True})}
        )

        SpriteCompiler(config).compile()

        assert mock_subprocess_run.call_count == 2

    def test_compile_sprite_helper(self, sprite_config: SpriteConfig):
        """Test the one-call helper."""
        document = compile_sprite(sprite_config)
        assert document.symbol_ids == ["i-home", "i-user"]


class TestFragmentCache:
    """Test the optional content-addressed cache."""

    def test_cache_created_from_config(self, sprite_config: SpriteConfig):
        """Test that enabling the cache in configuration creates one."""
        config = sprite_config.model_copy(update={"cache": CacheConfig(enabled=True)})
        assert isinstance(SpriteCompiler(config).cache, ContentCache)
        assert SpriteCompiler(sprite_config).cache is None

    def test_cache_hits_on_rerun(self, sprite_config: SpriteConfig, recording_optimizer: Any):
        """Test that unchanged icons are served from the cache."""
        cache: ContentCache = ContentCache()
        compiler = SpriteCompiler(sprite_config, optimizer=recording_optimizer, cache=cache)

        first = compiler.compile().content
        second = compiler.compile().content

        assert first == second
        assert cache.hits == 2
        assert cache.misses == 2
        assert len(recording_optimizer.calls) == 4

    def test_cache_output_matches_uncached(
        self, sprite_config: SpriteConfig, recording_optimizer: Any
    ):
        """Test that caching never changes the output."""
        uncached = SpriteCompiler(sprite_config, optimizer=recording_optimizer).compile().content
        cached = SpriteCompiler(
            sprite_config, optimizer=recording_optimizer, cache=ContentCache()
        ).compile().content

        assert cached == uncached

    def test_changed_content_misses_cache(
        self, sprite_config: SpriteConfig, recording_optimizer: Any
    ):
        """Test that edited icons are transformed again."""
        cache: ContentCache = ContentCache()
        compiler = SpriteCompiler(sprite_config, optimizer=recording_optimizer, cache=cache)
        compiler.compile()
        (sprite_config.source_dir / "home.svg").write_text("<svg><rect/></svg>", encoding="utf-8")

        document = compiler.compile()

        assert '<symbol id="i-home"><rect/></symbol>' in document.content
        assert cache.hits == 1

    def test_cache_statistics_logged(
        self,
        sprite_config: SpriteConfig,
        recording_optimizer: Any,
        caplog: pytest.LogCaptureFixture,
    ):
        """Test that each compile reports cache hits, misses and entries."""
        caplog.set_level(logging.DEBUG, logger="icon_sprite.compiler.pipeline")
        compiler = SpriteCompiler(sprite_config, optimizer=recording_optimizer, cache=ContentCache())
        compiler.compile()
        compiler.compile()

        stats = [r.getMessage() for r in caplog.records if "Fragment cache" in r.getMessage()]
        assert len(stats) == 2
        assert stats[-1].startswith("Fragment cache: 2 hits, 2 misses, 2 entries")
