"""Rebuild-on-change mode.

Keeps one SpriteCompiler alive and recompiles whenever the source directory
changes, so the fragment cache carries over between builds. Changes are
detected by polling file names, sizes and modification times.
"""

import logging
import time
from collections.abc import Callable
from pathlib import Path

from icon_sprite.compiler.pipeline import SpriteCompiler
from icon_sprite.constants import DEFAULT_WATCH_INTERVAL_SECONDS
from icon_sprite.exceptions import SpriteCompilerError
from icon_sprite.models.icon import SpriteDocument
from icon_sprite.utils import file_utils

Snapshot = dict[Path, tuple[int, int]]


class SpriteWatcher:
    """Polls the source directory and rebuilds the sprite on change.

    Attributes:
        compiler: Compiler reused for every build
        interval_seconds: Delay between two polls
        builds: Number of compile attempts so far
        failures: Number of compile attempts that raised a compiler error
        logger: Logger instance
    """

    def __init__(
        self,
        compiler: SpriteCompiler,
        interval_seconds: float = DEFAULT_WATCH_INTERVAL_SECONDS,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        """Initialize the watcher.

        Args:
            compiler: Compiler to reuse.
            interval_seconds: Delay between two polls.
            sleep: Sleep function; time.sleep if None.
        """
        self.compiler = compiler
        self.interval_seconds = interval_seconds
        self.sleep = sleep if sleep is not None else time.sleep
        self.builds = 0
        self.failures = 0
        self._running = False
        self.logger = logging.getLogger(__name__)

    def snapshot(self) -> Snapshot:
        """Record the state of every file in the source directory.

        Returns:
            Mapping of path to (mtime in ns, size); empty if the directory is missing.
        """
        try:
            paths = file_utils.list_files(self.compiler.config.source_dir)
        except OSError:
            return {}

        state: Snapshot = {}
        for path in paths:
            try:
                stat = path.stat()
            except FileNotFoundError:
                # Removed between listing and stat
                continue
            state[path] = (stat.st_mtime_ns, stat.st_size)
        return state

    def build(self) -> SpriteDocument | None:
        """Compile once, reporting compiler errors instead of raising them.

        Returns:
            The written document, or None if the build failed.
        """
        self.builds += 1
        try:
            document = self.compiler.compile()
        except SpriteCompilerError as e:
            self.failures += 1
            self.logger.error(f"Build failed, previous sprite kept: {type(e).__name__}: {e}")
            return None

        self.logger.info(f"Built {len(document.fragments)} symbols")
        return document

    def run(self, max_builds: int | None = None) -> None:
        """Build now, then rebuild after every change until stopped.

        The snapshot is taken after each build, so files rewritten in place by
        the optimizer do not trigger another build.

        Args:
            max_builds: Stop after this many builds; run until interrupted if None.
        """
        self._running = True
        self.logger.info(
            f"Watching {self.compiler.config.source_dir} every {self.interval_seconds}s"
        )

        try:
            self.build()
            last = self.snapshot()

            while self._running and (max_builds is None or self.builds < max_builds):
                self.sleep(self.interval_seconds)
                current = self.snapshot()
                if current == last:
                    continue

                self.logger.info("Source directory changed, rebuilding")
                self.build()
                last = self.snapshot()
        except KeyboardInterrupt:
            self.logger.info("Watch interrupted by user")
        finally:
            self._running = False

    def stop(self) -> None:
        """Stop after the current poll."""
        self._running = False
