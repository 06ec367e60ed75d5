"""Local cache for offline editing."""

from novelsync.cli.cache.manager import CacheManager

__all__ = ["CacheManager"]
