"""Content-addressed caching for transformed icon fragments.

Entries are keyed by a hash of everything that determines a fragment, so a
cached value can never be stale and no expiry is needed; the cache is only
bounded by size.
"""

import hashlib
import logging
from collections import OrderedDict
from typing import Generic, TypeVar

from icon_sprite.constants import (
    BYTES_PER_KILOBYTE,
    BYTES_PER_MEGABYTE,
    DEFAULT_CACHE_SIZE_MB,
)

T = TypeVar("T")


def content_key(*parts: str) -> str:
    """Build a cache key from the inputs of a transformation.

    Args:
        *parts: Strings that fully determine the cached value

    Returns:
        Hex SHA-256 digest of the parts.
    """
    digest = hashlib.sha256()
    for part in parts:
        encoded = part.encode("utf-8")
        # Length prefix keeps ("ab", "c") and ("a", "bc") apart
        digest.update(len(encoded).to_bytes(8, "big"))
        digest.update(encoded)
    return digest.hexdigest()


class ContentCache(Generic[T]):
    """LRU cache with a total size limit.

    Attributes:
        max_size_bytes: Maximum cache size in bytes
        hits: Number of successful lookups
        misses: Number of failed lookups
        logger: Logger instance
    """

    def __init__(self, max_size_mb: float = DEFAULT_CACHE_SIZE_MB) -> None:
        """Initialize the cache.

        Args:
            max_size_mb: Maximum cache size in megabytes
        """
        self.max_size_bytes = int(max_size_mb * BYTES_PER_MEGABYTE)
        self.hits = 0
        self.misses = 0
        self._cache: OrderedDict[str, T] = OrderedDict()
        self._sizes: dict[str, int] = {}
        self._current_size = 0
        self.logger = logging.getLogger(__name__)

    def get(self, key: str) -> T | None:
        """Get an item from the cache.

        Args:
            key: Cache key

        Returns:
            Cached item or None if not found
        """
        if key not in self._cache:
            self.misses += 1
            return None

        self.hits += 1
        self._cache.move_to_end(key)
        return self._cache[key]

    def put(self, key: str, value: T, size_bytes: int) -> None:
        """Put an item in the cache.

        Items larger than the whole cache are not stored.

        Args:
            key: Cache key
            value: Item to cache
            size_bytes: Size of the item in bytes
        """
        if key in self._cache:
            self._remove(key)

        if size_bytes > self.max_size_bytes:
            self.logger.debug(f"Not caching {key[:12]}: larger than cache")
            return

        while self._current_size + size_bytes > self.max_size_bytes and self._cache:
            self._evict_oldest()

        self._cache[key] = value
        self._sizes[key] = size_bytes
        self._current_size += size_bytes

        self.logger.debug(
            f"Cached {key[:12]} ({size_bytes / BYTES_PER_KILOBYTE:.1f}KB), "
            f"total size: {self._current_size / BYTES_PER_MEGABYTE:.2f}MB"
        )

    def _remove(self, key: str) -> None:
        """Remove an item from the cache.

        Args:
            key: Cache key to remove
        """
        if key in self._cache:
            del self._cache[key]
            self._current_size -= self._sizes.pop(key)

    def _evict_oldest(self) -> None:
        """Evict the least recently used item."""
        key = next(iter(self._cache))
        self.logger.debug(f"Evicting {key[:12]} from cache")
        self._remove(key)

    @property
    def size_bytes(self) -> int:
        """Get current cache size in bytes."""
        return self._current_size

    @property
    def item_count(self) -> int:
        """Get number of items in cache."""
        return len(self._cache)
