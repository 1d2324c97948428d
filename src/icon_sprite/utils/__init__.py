"""Module initialization."""

from icon_sprite.utils.cache_manager import ContentCache, content_key
from icon_sprite.utils.path_utils import PathResolver, path_resolver, validate_config_path

__all__ = [
    # Path utilities
    "PathResolver",
    "path_resolver",
    "validate_config_path",
    # Caching
    "ContentCache",
    "content_key",
]
