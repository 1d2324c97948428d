"""Custom exception hierarchy for the icon sprite compiler.

This module defines domain-specific exceptions so that every fatal outcome of
a compile run carries a clear intent and enough context to be reported
without a traceback.

Exception Hierarchy:
    SpriteCompilerError (Base)
    ├── ConfigurationError
    │   ├── InvalidConfigError
    │   └── ConfigFileNotFoundError
    ├── SourceError
    │   ├── SourceUnreadableError
    │   ├── InvalidIconNameError
    │   └── SymbolCollisionError
    ├── TransformError
    │   └── MalformedSymbolError
    ├── OptimizationError
    └── OutputError
        ├── DestinationWriteError
        └── TemplateMissingError
"""

from typing import Any


# Base Exception
class SpriteCompilerError(Exception):
    """Base exception for all icon sprite compiler errors.

    This is the root exception that all custom exceptions inherit from,
    allowing the command-line entry point to turn any of them into a
    non-zero exit status.

    Attributes:
        message: Human-readable error description
        details: Optional dictionary containing additional error context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize the exception with message and optional details.

        Args:
            message: Human-readable error description
            details: Optional dictionary containing additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the exception."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


# Configuration Exceptions
class ConfigurationError(SpriteCompilerError):
    """Base exception for configuration-related errors."""
    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration contains invalid values.

    Example:
        raise InvalidConfigError(
            "Invalid configuration file",
            {"path": "icon-sprite.yaml", "error": "source_dir: Field required"}
        )
    """
    pass


class ConfigFileNotFoundError(ConfigurationError):
    """Raised when configuration file cannot be found.

    Example:
        raise ConfigFileNotFoundError(
            "Configuration file not found",
            {"path": "/etc/icon-sprite/icon-sprite.yaml", "searched_locations": [...]}
        )
    """
    pass


# Source Exceptions
class SourceError(SpriteCompilerError):
    """Base exception for problems with the icon sources."""
    pass


class SourceUnreadableError(SourceError):
    """Raised when the source directory or an icon file cannot be read.

    Example:
        raise SourceUnreadableError(
            "Source directory not found",
            {"path": "assets/icons"}
        )
    """
    pass


class InvalidIconNameError(SourceError):
    """Raised when a filename normalizes to an empty symbol name.

    Example:
        raise InvalidIconNameError(
            "Icon filename produces an empty name",
            {"filename": ".svg"}
        )
    """
    pass


class SymbolCollisionError(SourceError):
    """Raised when two source files map to the same symbol id.

    Example:
        raise SymbolCollisionError(
            "Duplicate symbol id",
            {"symbol_id": "i-home", "files": ["Home.svg", "home.svg"]}
        )
    """
    pass


# Transform Exceptions
class TransformError(SpriteCompilerError):
    """Base exception for markup rewriting errors."""
    pass


class MalformedSymbolError(TransformError):
    """Raised when an icon has no usable <svg> root element.

    Example:
        raise MalformedSymbolError(
            "No <svg> opening tag found",
            {"symbol_id": "i-home"}
        )
    """
    pass


# Optimizer Exceptions
class OptimizationError(SpriteCompilerError):
    """Raised when the external optimizer fails on a file.

    Example:
        raise OptimizationError(
            "SVG optimizer failed",
            {"path": "assets/icons/home.svg", "returncode": 1, "stderr": "..."}
        )
    """
    pass


# Output Exceptions
class OutputError(SpriteCompilerError):
    """Base exception for errors producing output files."""
    pass


class DestinationWriteError(OutputError):
    """Raised when the sprite or its directory cannot be written.

    Example:
        raise DestinationWriteError(
            "Failed to write sprite",
            {"path": "public/svg/icons.svg", "error": "Permission denied"}
        )
    """
    pass


class TemplateMissingError(OutputError):
    """Raised when a companion component template does not exist.

    Example:
        raise TemplateMissingError(
            "Component template not found",
            {"source": "stubs/icon.html.j2"}
        )
    """
    pass


# Utility function for exception chaining
def chain_exception(new_exception: SpriteCompilerError, cause: Exception) -> SpriteCompilerError:
    """Chain a new exception with its underlying cause.

    Args:
        new_exception: The new domain-specific exception to raise
        cause: The underlying exception that caused this error

    Returns:
        The new exception with cause properly chained

    Example:
        try:
            content = file_utils.read_text(path)
        except OSError as e:
            raise chain_exception(
                SourceUnreadableError("Failed to read icon", {"path": str(path)}),
                e
            ) from e
    """
    new_exception.__cause__ = cause
    return new_exception
