"""Application-wide constants for the icon sprite compiler.

This module centralizes the fixed strings and defaults used throughout the
compiler so that the sprite format and the naming contract with the companion
component live in exactly one place.

Constants are grouped into the following categories:
- Path Constants: Default file and directory names
- Sprite Format Constants: XML declaration, root element and namespaces
- Symbol Constants: Id prefix and vendor class rewrites
- Source Filter Constants: Accepted extension and content types
- Optimizer Constants: Default external optimizer invocation
- Cache Constants: Sizing for the fragment cache
- Watch Mode Constants: Polling of the source directory
"""

# Path constants
APP_DIR_NAME = "icon-sprite"  # Directory name for user/system configuration
CONFIG_FILENAME = "icon-sprite.yaml"  # Default configuration filename
COMPONENT_TEMPLATE_NAME = "icon.html.j2"  # Bundled companion component template

# Sprite format constants
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
SVG_NAMESPACE = "http://www.w3.org/2000/svg"
XLINK_NAMESPACE = "http://www.w3.org/1999/xlink"
SPRITE_ROOT_OPEN = (
    f'<svg version="1.1" xmlns="{SVG_NAMESPACE}" xmlns:xlink="{XLINK_NAMESPACE}">'
)
SPRITE_ROOT_CLOSE = "</svg>"
DEFS_OPEN = "<defs>"
DEFS_CLOSE = "</defs>"

# Symbol constants
DEFAULT_ID_PREFIX = "i-"  # Prefix for every symbol id, referenced as #i-{slug}
VENDOR_CLASS_TOKEN = "feather "  # Removed from icon markup
VENDOR_CLASS_PREFIX = "feather-"  # Rewritten to ICON_CLASS_PREFIX
ICON_CLASS_PREFIX = "icon-"
SLUG_SEPARATOR = "-"

# Source filter constants
SVG_EXTENSION = "svg"
ALLOWED_CONTENT_TYPES = frozenset(
    {
        "text/html",
        "image/svg",
        "image/svg+xml",
        "text/plain",
    }
)
UNKNOWN_CONTENT_TYPE = "application/octet-stream"
SNIFF_BYTES = 2048  # Number of leading bytes inspected when sniffing content type

# Optimizer constants
DEFAULT_OPTIMIZER_BINARY = "svgo"
DEFAULT_OPTIMIZER_ARGS = (
    "--disable=cleanupIDs,removeViewBox",
    "--enable=removeDimensions",
)
DEFAULT_OPTIMIZER_TIMEOUT_SECONDS = 30

# Cache constants
DEFAULT_CACHE_SIZE_MB = 10.0
BYTES_PER_KILOBYTE = 1024
BYTES_PER_MEGABYTE = 1024 * 1024

# Watch mode constants
DEFAULT_WATCH_INTERVAL_SECONDS = 1.0  # Delay between two polls of the source directory

# Exit codes
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

SUCCESS_MESSAGE = "Icon sprite successfully generated."
