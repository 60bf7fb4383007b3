"""
Feed caching package.

Feeds are cached in process memory keyed by token. Entries expire lazily:
nothing sweeps the cache, readers decide staleness and regenerate.
"""

from .feed_cache import FeedCache, FeedCacheEntry, utc_now

__all__ = ["FeedCache", "FeedCacheEntry", "utc_now"]
