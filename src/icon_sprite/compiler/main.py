"""Command-line entry point for the icon sprite compiler.

Loads the configuration (a YAML file, command-line flags, or both), sets up
logging and runs one compile, or keeps rebuilding on change with --watch.
In one-shot mode every compiler error ends the process with a non-zero
status and a message on stderr.
"""

import argparse
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from icon_sprite.compiler.optimizer import NoopOptimizer
from icon_sprite.compiler.pipeline import SpriteCompiler
from icon_sprite.compiler.watcher import SpriteWatcher
from icon_sprite.constants import (
    CONFIG_FILENAME,
    DEFAULT_WATCH_INTERVAL_SECONDS,
    EXIT_FAILURE,
    EXIT_INTERRUPTED,
    EXIT_SUCCESS,
    SUCCESS_MESSAGE,
)
from icon_sprite.exceptions import (
    InvalidConfigError,
    SpriteCompilerError,
    chain_exception,
)
from icon_sprite.models.config import SpriteConfig
from icon_sprite.utils.early_error_handler import (
    handle_keyboard_interrupt,
    handle_startup_error,
    handle_unexpected_error,
)
from icon_sprite.utils.logging import compile_context, setup_logging
from icon_sprite.utils.path_utils import path_resolver, validate_config_path

LOGGER_NAME = "icon_sprite"


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Returns:
        The configured parser.
    """
    parser = argparse.ArgumentParser(
        prog="icon-sprite",
        description="Compile a directory of SVG icons into a single <symbol> sprite",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Path to configuration file (default: search for {CONFIG_FILENAME})",
    )
    parser.add_argument("--src", type=Path, help="Directory containing the SVG icons")
    parser.add_argument("--out", type=Path, help="Sprite file to write")
    parser.add_argument("--prefix", type=str, help="Prefix for every symbol id (default: i-)")
    parser.add_argument(
        "--no-optimize",
        action="store_true",
        help="Do not run the external SVG optimizer",
    )
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Keep running and rebuild the sprite whenever the source directory changes",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=DEFAULT_WATCH_INTERVAL_SECONDS,
        help=f"Seconds between polls in watch mode (default: {DEFAULT_WATCH_INTERVAL_SECONDS})",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def load_config(args: argparse.Namespace) -> SpriteConfig:
    """Build the configuration from a config file and command-line overrides.

    A config file is required unless both --src and --out are given.

    Args:
        args: Parsed command-line arguments.

    Returns:
        The effective configuration.

    Raises:
        ConfigFileNotFoundError: If no config file is found and --src/--out are missing.
        InvalidConfigError: If the file cannot be read or decoded, or the file
            or the overrides hold invalid values.
    """
    config_path: Path | None = None
    if args.config is not None or path_resolver.get_config_path() is not None:
        config_path = validate_config_path(args.config)
    elif args.src is None or args.out is None:
        # Raises with the list of searched locations
        config_path = validate_config_path(None)

    try:
        if config_path is not None:
            config_data = SpriteConfig.from_yaml(config_path).model_dump()
        else:
            config_data = {}

        if args.src is not None:
            config_data["source_dir"] = args.src
        if args.out is not None:
            config_data["output_path"] = args.out
        if args.prefix is not None:
            config_data["id_prefix"] = args.prefix
        if args.verbose:
            config_data.setdefault("logging", {})["level"] = "DEBUG"

        return SpriteConfig.model_validate(config_data)
    except (ValidationError, yaml.YAMLError, OSError, UnicodeDecodeError) as e:
        raise chain_exception(
            InvalidConfigError(
                "Invalid configuration",
                {"path": str(config_path) if config_path else None, "error": str(e)},
            ),
            e,
        ) from e


def run(argv: list[str] | None = None) -> int:
    """Run the compiler with the given command-line arguments.

    Args:
        argv: Arguments without the program name; defaults to sys.argv[1:].

    Returns:
        Process exit status.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.interval <= 0:
        parser.error("--interval must be greater than zero")

    try:
        config = load_config(args)
    except SpriteCompilerError as e:
        handle_startup_error("Configuration Error", e.message, e.details)
        return EXIT_FAILURE

    logger = setup_logging(config.logging, LOGGER_NAME)
    optimizer = NoopOptimizer() if args.no_optimize else None

    with compile_context(config):
        try:
            compiler = SpriteCompiler(config, optimizer=optimizer)
            if args.watch:
                # Runs until Ctrl+C; build errors are logged and the watch goes on
                SpriteWatcher(compiler, interval_seconds=args.interval).run()
                return EXIT_SUCCESS
            document = compiler.compile()
        except KeyboardInterrupt:
            handle_keyboard_interrupt()
            return EXIT_INTERRUPTED
        except SpriteCompilerError as e:
            logger.error(f"{type(e).__name__}: {e}")
            handle_startup_error("Compile Error", e.message, e.details)
            return EXIT_FAILURE
        except Exception as e:
            logger.exception("Unexpected error during compile")
            handle_unexpected_error(e)
            return EXIT_FAILURE

        logger.debug(f"Symbols: {', '.join(document.symbol_ids)}")

    print(SUCCESS_MESSAGE)
    return EXIT_SUCCESS


def main() -> None:
    """Main entry point for the ``icon-sprite`` command."""
    sys.exit(run())


if __name__ == "__main__":
    main()
