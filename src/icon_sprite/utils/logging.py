"""Logging for compile runs.

Module loggers are plain ``logging`` loggers below ``icon_sprite``; structlog
only renders their records. Every record emitted inside :func:`compile_context`
carries the source directory, sprite path and id prefix of the run, which keeps
watch-mode output and shared log files attributable.

Logs go to stderr or to a rotating file. stdout is left to the success message.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler

import structlog
from structlog.contextvars import bound_contextvars, merge_contextvars
from structlog.stdlib import ProcessorFormatter

from icon_sprite.constants import BYTES_PER_MEGABYTE
from icon_sprite.models.config import LoggingConfig, SpriteConfig
from icon_sprite.utils import file_utils
from icon_sprite.utils.early_error_handler import handle_startup_error
from icon_sprite.utils.path_utils import path_resolver


def build_formatter(log_format: str) -> ProcessorFormatter:
    """Create the formatter shared by every handler.

    Args:
        log_format: "json" or "text".

    Returns:
        A formatter rendering stdlib records through structlog.
    """
    pre_chain = [
        merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format.lower() == "json":
        # JSON needs tracebacks as strings; the console renderer formats them itself
        pre_chain.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    return ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)


def _open_log_file(log_file: str, config: LoggingConfig) -> logging.Handler | None:
    """Open the rotating log file, reporting failures on stderr."""
    log_path = path_resolver.normalize_path(log_file)
    try:
        file_utils.ensure_dir_exists(log_path.parent)
        return RotatingFileHandler(
            log_path,
            maxBytes=config.max_size_mb * BYTES_PER_MEGABYTE,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        handle_startup_error(
            "Logging Error", f"Failed to set up file logging: {e}", {"log_file": str(log_path)}
        )
        return None


def setup_logging(config: LoggingConfig, name: str) -> logging.Logger:
    """Attach a single handler to the named logger.

    Args:
        config: Logging configuration.
        name: Logger name. Module loggers below this name inherit the handler.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(name)

    # Repeated runs in one process must not stack handlers
    for old_handler in logger.handlers:
        old_handler.close()
    logger.handlers = []

    level = getattr(logging, config.level.upper(), logging.INFO)
    logger.setLevel(level)

    handler = _open_log_file(config.file, config) if config.file else None
    file_failed = bool(config.file) and handler is None
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(build_formatter(config.format))
    handler.setLevel(level)
    logger.addHandler(handler)

    if file_failed:
        logger.warning(f"Logging to stderr, {config.file} could not be opened")

    return logger


@contextmanager
def compile_context(config: SpriteConfig) -> Iterator[None]:
    """Tag every record logged inside the block with the run's paths.

    Args:
        config: Configuration of the run.

    Yields:
        Nothing; the context is removed on exit.
    """
    with bound_contextvars(
        source_dir=str(config.source_dir),
        sprite=str(config.output_path),
        id_prefix=config.id_prefix,
    ):
        yield
