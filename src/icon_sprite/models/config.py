"""Configuration models for the icon sprite compiler.

Defines Pydantic models for the compiler configuration: source and output
locations, symbol naming, the external optimizer, companion components,
fragment caching and logging.
"""

import re
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from icon_sprite.constants import (
    DEFAULT_CACHE_SIZE_MB,
    DEFAULT_ID_PREFIX,
    DEFAULT_OPTIMIZER_ARGS,
    DEFAULT_OPTIMIZER_BINARY,
    DEFAULT_OPTIMIZER_TIMEOUT_SECONDS,
)

_ID_PREFIX_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")


def _normalize_path(path: str | Path) -> Path:
    """Convert a string path to a Path object.

    Internal utility function to avoid circular imports with path_resolver.

    Args:
        path: String or Path object

    Returns:
        A Path object.
    """
    return Path(path) if isinstance(path, str) else path


def _rebase(path: Path, base_dir: Path) -> Path:
    """Anchor a relative path at ``base_dir``; absolute paths are returned unchanged."""
    return path if path.is_absolute() else base_dir / path


class OptimizerConfig(BaseModel):
    """External SVG optimizer configuration."""

    enabled: bool = True
    binary: str = DEFAULT_OPTIMIZER_BINARY
    args: list[str] = Field(default_factory=lambda: list(DEFAULT_OPTIMIZER_ARGS))
    timeout_seconds: float = DEFAULT_OPTIMIZER_TIMEOUT_SECONDS

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate the optimizer timeout is positive.

        Args:
            v: The timeout in seconds.

        Returns:
            The validated timeout value.

        Raises:
            ValueError: If the timeout is not greater than zero.
        """
        if v <= 0:
            raise ValueError("Optimizer timeout must be greater than zero")
        return v


class ComponentConfig(BaseModel):
    """A companion component template to copy next to the sprite.

    When ``source`` is omitted the bundled icon template is used.
    """

    destination: Path
    source: Path | None = None


class CacheConfig(BaseModel):
    """Fragment cache configuration."""

    enabled: bool = False
    max_size_mb: float = DEFAULT_CACHE_SIZE_MB

    @field_validator("max_size_mb")
    @classmethod
    def validate_max_size(cls, v: float) -> float:
        """Validate the cache size limit is positive.

        Args:
            v: The cache size in megabytes.

        Returns:
            The validated size.

        Raises:
            ValueError: If the size is not greater than zero.
        """
        if v <= 0:
            raise ValueError("Cache size must be greater than zero")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    file: str | None = None
    format: str = "text"
    max_size_mb: int = 5
    backup_count: int = 3

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate the log format is supported.

        Args:
            v: The log format string.

        Returns:
            The validated format, lower-cased.

        Raises:
            ValueError: If the format is not "json" or "text".
        """
        valid_formats = ["json", "text"]
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of: {', '.join(valid_formats)}")
        return v.lower()


class SpriteConfig(BaseModel):
    """Main compiler configuration."""

    source_dir: Path
    output_path: Path
    id_prefix: str = DEFAULT_ID_PREFIX
    hoist_defs: bool = True
    atomic_write: bool = True
    optimizer: OptimizerConfig = Field(default_factory=OptimizerConfig)
    components: list[ComponentConfig] = Field(default_factory=list)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("id_prefix")
    @classmethod
    def validate_id_prefix(cls, v: str) -> str:
        """Validate the symbol id prefix yields valid fragment identifiers.

        Args:
            v: The id prefix.

        Returns:
            The validated prefix.

        Raises:
            ValueError: If the prefix is empty, does not start with a letter or
                contains characters other than letters, digits, "-" and "_".
        """
        if not _ID_PREFIX_PATTERN.match(v):
            raise ValueError(
                "Id prefix must start with a letter and contain only letters, digits, '-' or '_'"
            )
        return v

    def resolve_paths(self, base_dir: str | Path) -> "SpriteConfig":
        """Return a copy with every relative path anchored at ``base_dir``.

        Args:
            base_dir: Directory relative paths are interpreted against,
                normally the directory holding the configuration file.

        Returns:
            A new SpriteConfig with absolute-or-rebased paths.
        """
        base = _normalize_path(base_dir)
        components = [
            component.model_copy(
                update={
                    "destination": _rebase(component.destination, base),
                    "source": _rebase(component.source, base) if component.source else None,
                }
            )
            for component in self.components
        ]
        log_file = self.logging.file
        logging_config = (
            self.logging.model_copy(update={"file": str(_rebase(Path(log_file), base))})
            if log_file
            else self.logging
        )
        return self.model_copy(
            update={
                "source_dir": _rebase(self.source_dir, base),
                "output_path": _rebase(self.output_path, base),
                "components": components,
                "logging": logging_config,
            }
        )

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "SpriteConfig":
        """Load configuration from a YAML file.

        Relative paths in the file are resolved against the file's directory.

        Args:
            config_path: Path to the YAML configuration file.

        Returns:
            An initialized SpriteConfig object with values from the YAML file.

        Raises:
            FileNotFoundError: If the specified config file doesn't exist.
            yaml.YAMLError: If the YAML file has invalid syntax.
            ValidationError: If the configuration values don't match the expected schema.
        """
        import yaml

        # Use direct import to avoid circular imports
        from icon_sprite.utils.file_utils import read_text

        path = _normalize_path(config_path)

        config_data = yaml.safe_load(read_text(path)) or {}

        return cls.model_validate(config_data).resolve_paths(path.parent)
