"""
In-memory feed cache keyed by feed token.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class FeedCacheEntry:
    """A cached calendar document and the moment it goes stale."""

    token: str
    document: str
    expires_at: datetime

    def is_stale(self, now: datetime) -> bool:
        return now > self.expires_at


class FeedCache:
    """
    Token -> FeedCacheEntry mapping shared by all requests.

    Entries are immutable and swapped whole under a lock, so a reader either
    sees the previous entry or the new one, never a document paired with the
    wrong expiry. Entries are never evicted; a stale entry stays until a
    refresh overwrites it.
    """

    def __init__(self, ttl: timedelta, clock: Clock = utc_now):
        if ttl <= timedelta(0):
            raise ValueError("ttl must be positive")
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, FeedCacheEntry] = {}
        self._lock = threading.Lock()

    def lookup(self, token: str) -> Optional[FeedCacheEntry]:
        """Return the entry for ``token`` or ``None``. Never changes state."""
        with self._lock:
            return self._entries.get(token)

    def store(self, token: str, document: str) -> FeedCacheEntry:
        """Insert or overwrite the entry for ``token`` with a fresh expiry."""
        entry = FeedCacheEntry(
            token=token,
            document=document,
            expires_at=self._clock() + self.ttl,
        )
        with self._lock:
            self._entries[token] = entry
        return entry

    def is_stale(self, entry: FeedCacheEntry) -> bool:
        return entry.is_stale(self._clock())

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, token: object) -> bool:
        with self._lock:
            return token in self._entries
