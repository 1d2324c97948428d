"""Common fixtures for testing the icon sprite compiler."""

from collections.abc import Callable, Generator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from icon_sprite.models.config import OptimizerConfig, SpriteConfig


@pytest.fixture(autouse=True)
def mock_subprocess_run() -> Generator[MagicMock, None, None]:
    """Mock subprocess.run so no test ever launches a real optimizer."""
    with patch("subprocess.run") as mock_run:
        mock_process = MagicMock()
        mock_process.returncode = 0
        mock_process.stdout = ""
        mock_process.stderr = ""
        mock_run.return_value = mock_process
        yield mock_run


class RecordingOptimizer:
    """Optimizer stub that records the files it was asked to optimize."""

    def __init__(self, rewrite: Callable[[str], str] | None = None) -> None:
        self.calls: list[Path] = []
        self.rewrite = rewrite

    def optimize(self, path: Path) -> None:
        self.calls.append(path)
        if self.rewrite is not None:
            path.write_text(self.rewrite(path.read_text(encoding="utf-8")), encoding="utf-8")


@pytest.fixture()
def recording_optimizer() -> RecordingOptimizer:
    """Create an optimizer stub that only records calls."""
    return RecordingOptimizer()


@pytest.fixture()
def icons_dir(tmp_path: Path) -> Path:
    """Create a source directory with two icons, one of them with defs."""
    src = tmp_path / "icons"
    src.mkdir()
    (src / "home.svg").write_text('<svg><path d="M0 0"/></svg>', encoding="utf-8")
    (src / "user.svg").write_text(
        '<svg><defs><clipPath id="c"/></defs><circle/></svg>', encoding="utf-8"
    )
    return src


@pytest.fixture()
def sprite_config(tmp_path: Path, icons_dir: Path) -> SpriteConfig:
    """Create a configuration pointing at the icons fixture directory."""
    return SpriteConfig(
        source_dir=icons_dir,
        output_path=tmp_path / "public" / "svg" / "icons.svg",
        optimizer=OptimizerConfig(enabled=False),
    )

