"""Early error handler for failures reported outside the logging system.

The command-line entry point uses these helpers so that fatal compile errors
are visible on stderr even when logging is sent to a file or fails to
initialize.
"""

import sys
from datetime import datetime
from typing import Any


def handle_startup_error(
    error_type: str, message: str, details: dict[str, Any] | None = None
) -> None:
    """Write a formatted error message to stderr.

    Args:
        error_type: Type of error (e.g., "Configuration Error", "Compile Error")
        message: Main error message
        details: Optional dictionary of additional error details
    """
    timestamp = datetime.now().isoformat()

    sys.stderr.write(f"\n[{timestamp}] {error_type}: {message}\n")

    if details:
        sys.stderr.write("Details:\n")
        for key, value in details.items():
            sys.stderr.write(f"  {key}: {value}\n")

    sys.stderr.flush()


def handle_keyboard_interrupt() -> None:
    """Handle keyboard interrupt gracefully."""
    sys.stderr.write("\n\nCompilation interrupted by user (Ctrl+C)\n")
    sys.stderr.flush()


def handle_unexpected_error(error: Exception) -> None:
    """Handle unexpected errors.

    Args:
        error: The unexpected exception
    """
    timestamp = datetime.now().isoformat()
    sys.stderr.write(f"\n[{timestamp}] Unexpected Error: {type(error).__name__}: {error}\n")
    sys.stderr.write("This is likely a bug. Please report it with the full error details.\n")
    sys.stderr.flush()
