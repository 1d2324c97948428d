"""Adapters for the external SVG optimizer.

The compiler treats optimization as a black box that rewrites a file in
place. Any object with an ``optimize(path)`` method can be injected; the
default runs the ``svgo`` command-line tool.
"""

import logging
import subprocess
from pathlib import Path
from typing import Protocol

from icon_sprite.constants import (
    DEFAULT_OPTIMIZER_ARGS,
    DEFAULT_OPTIMIZER_BINARY,
    DEFAULT_OPTIMIZER_TIMEOUT_SECONDS,
)
from icon_sprite.exceptions import OptimizationError, chain_exception
from icon_sprite.models.config import OptimizerConfig
from icon_sprite.utils.path_utils import path_resolver


class SvgOptimizer(Protocol):
    """Something that optimizes an SVG file in place."""

    def optimize(self, path: Path) -> None:
        """Rewrite the file at ``path``; raise OptimizationError on failure."""
        ...


class NoopOptimizer:
    """Optimizer that leaves files untouched."""

    def optimize(self, path: Path) -> None:
        """Do nothing."""
        return None


class SvgoOptimizer:
    """Runs svgo on each file, writing the result back to the same path."""

    def __init__(
        self,
        binary: str = DEFAULT_OPTIMIZER_BINARY,
        args: list[str] | tuple[str, ...] = DEFAULT_OPTIMIZER_ARGS,
        timeout_seconds: float = DEFAULT_OPTIMIZER_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the optimizer.

        Args:
            binary: svgo executable name or path.
            args: Extra command-line options, the optimization policy.
            timeout_seconds: Maximum run time per file.
        """
        self.binary = binary
        self.args = list(args)
        self.timeout_seconds = timeout_seconds
        self.logger = logging.getLogger(__name__)

    def build_command(self, path: Path) -> list[str]:
        """Build the svgo command line for one file.

        Args:
            path: File to optimize.

        Returns:
            Argument list suitable for subprocess.run.
        """
        executable = path_resolver.get_bin_path(self.binary)
        return [str(executable), *self.args, "--input", str(path), "--output", str(path)]

    def optimize(self, path: Path) -> None:
        """Optimize ``path`` in place.

        Args:
            path: File to optimize.

        Raises:
            OptimizationError: If svgo is missing, times out or exits non-zero.
        """
        command = self.build_command(path)
        details = {"path": str(path), "command": " ".join(command)}

        try:
            subprocess.run(
                command,
                check=True,
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
            )
        except FileNotFoundError as e:
            raise chain_exception(
                OptimizationError(f"SVG optimizer not found: {self.binary}", details), e
            ) from e
        except subprocess.TimeoutExpired as e:
            raise chain_exception(
                OptimizationError(
                    "SVG optimizer timed out", {**details, "timeout": self.timeout_seconds}
                ),
                e,
            ) from e
        except subprocess.CalledProcessError as e:
            raise chain_exception(
                OptimizationError(
                    "SVG optimizer failed",
                    {**details, "returncode": e.returncode, "stderr": (e.stderr or "").strip()},
                ),
                e,
            ) from e

        self.logger.debug(f"Optimized {path.name}")


def build_optimizer(config: OptimizerConfig) -> SvgOptimizer:
    """Create the optimizer described by the configuration.

    Args:
        config: Optimizer configuration.

    Returns:
        SvgoOptimizer when enabled, otherwise NoopOptimizer.
    """
    if not config.enabled:
        return NoopOptimizer()
    return SvgoOptimizer(
        binary=config.binary, args=config.args, timeout_seconds=config.timeout_seconds
    )
