"""Tests for rebuild-on-change mode."""

from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from icon_sprite.compiler.pipeline import SpriteCompiler
from icon_sprite.compiler.watcher import SpriteWatcher
from icon_sprite.models.config import SpriteConfig
from icon_sprite.utils.cache_manager import ContentCache

TWO_DEFS_ICON = '<svg><defs><mask id="a"/></defs><path/><defs><mask id="b"/></defs></svg>'


def edits(*steps: Callable[[], None]) -> Callable[[float], None]:
    """Build a sleep stub that applies one edit per call, then does nothing."""
    pending = list(steps)

    def sleep(_seconds: float) -> None:
        if pending:
            pending.pop(0)()

    return sleep


@pytest.fixture()
def compiler(sprite_config: SpriteConfig, recording_optimizer: Any) -> SpriteCompiler:
    """Create a compiler with a fragment cache."""
    return SpriteCompiler(sprite_config, optimizer=recording_optimizer, cache=ContentCache())


class TestSpriteWatcher:
    """Test polling and rebuilding."""

    def test_new_icon_triggers_rebuild(self, compiler: SpriteCompiler):
        """Test that adding an icon rebuilds the sprite with it."""
        source_dir = compiler.config.source_dir
        sleep = edits(
            lambda: (source_dir / "star.svg").write_text("<svg><path/></svg>", encoding="utf-8")
        )
        watcher = SpriteWatcher(compiler, interval_seconds=0.5, sleep=sleep)

        watcher.run(max_builds=2)

        assert watcher.builds == 2
        assert watcher.failures == 0
        output = compiler.config.output_path.read_text(encoding="utf-8")
        assert '<symbol id="i-star"><path/></symbol>' in output

    def test_cache_reused_across_rebuilds(self, compiler: SpriteCompiler):
        """Test that unchanged icons come from the cache on rebuild."""
        source_dir = compiler.config.source_dir
        sleep = edits(
            lambda: (source_dir / "star.svg").write_text("<svg><path/></svg>", encoding="utf-8")
        )

        SpriteWatcher(compiler, sleep=sleep).run(max_builds=2)

        assert compiler.cache is not None
        assert compiler.cache.hits == 2
        assert compiler.cache.misses == 3

    def test_no_rebuild_without_changes(self, compiler: SpriteCompiler):
        """Test that polling an unchanged directory does not rebuild."""
        sleep = MagicMock()
        watcher = SpriteWatcher(compiler, sleep=sleep)
        sleep.side_effect = lambda _: sleep.call_count >= 3 and watcher.stop()

        watcher.run()

        assert watcher.builds == 1
        assert sleep.call_count == 3
        sleep.assert_called_with(watcher.interval_seconds)

    def test_optimizer_rewrites_do_not_trigger_rebuild(
        self, sprite_config: SpriteConfig, recording_optimizer: Any
    ):
        """Test that files rewritten in place by the optimizer are not seen as changes."""
        recording_optimizer.rewrite = lambda text: text.replace("<svg>", "<svg >")
        compiler = SpriteCompiler(sprite_config, optimizer=recording_optimizer)
        sleep = MagicMock()
        watcher = SpriteWatcher(compiler, sleep=sleep)
        sleep.side_effect = lambda _: sleep.call_count >= 2 and watcher.stop()

        watcher.run()

        assert watcher.builds == 1
        assert len(recording_optimizer.calls) == 2

    def test_failed_build_keeps_watching(self, compiler: SpriteCompiler):
        """Test that a compiler error is counted and the next change rebuilds."""
        broken = compiler.config.source_dir / "broken.svg"
        sleep = edits(
            lambda: broken.write_text(TWO_DEFS_ICON, encoding="utf-8"),
            lambda: broken.write_text("<svg><rect/></svg>", encoding="utf-8"),
        )
        watcher = SpriteWatcher(compiler, sleep=sleep)

        watcher.run(max_builds=3)

        assert watcher.builds == 3
        assert watcher.failures == 1
        output = compiler.config.output_path.read_text(encoding="utf-8")
        assert '<symbol id="i-broken"><rect/></symbol>' in output

    def test_failed_build_returns_none(self, compiler: SpriteCompiler):
        """Test that build() reports a failure instead of raising."""
        (compiler.config.source_dir / "broken.svg").write_text(TWO_DEFS_ICON, encoding="utf-8")
        watcher = SpriteWatcher(compiler)

        assert watcher.build() is None
        assert watcher.failures == 1
        assert not compiler.config.output_path.exists()

    def test_keyboard_interrupt_ends_watch(self, compiler: SpriteCompiler):
        """Test that Ctrl+C during a poll stops the watch quietly."""
        watcher = SpriteWatcher(compiler, sleep=MagicMock(side_effect=KeyboardInterrupt))

        watcher.run()

        assert watcher.builds == 1
        assert watcher._running is False
        assert compiler.config.output_path.exists()


class TestSnapshot:
    """Test source directory snapshots."""

    def test_snapshot_lists_every_file(self, compiler: SpriteCompiler):
        """Test that every file is recorded with its size."""
        source_dir = compiler.config.source_dir
        (source_dir / "notes.txt").write_text("hello", encoding="utf-8")

        state = SpriteWatcher(compiler).snapshot()

        assert sorted(p.name for p in state) == ["home.svg", "notes.txt", "user.svg"]
        assert state[source_dir / "notes.txt"][1] == 5

    def test_snapshot_of_missing_directory(self, tmp_path: Path, recording_optimizer: Any):
        """Test that a missing source directory gives an empty snapshot."""
        config = SpriteConfig(source_dir=tmp_path / "missing", output_path=tmp_path / "s.svg")
        compiler = SpriteCompiler(config, optimizer=recording_optimizer)

        assert SpriteWatcher(compiler).snapshot() == {}
