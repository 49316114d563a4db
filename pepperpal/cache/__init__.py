"""Response cache."""

from pepperpal.cache.response_cache import CacheEntry, CacheLookup, CacheStats, ResponseCache

__all__ = ["CacheEntry", "CacheLookup", "CacheStats", "ResponseCache"]
