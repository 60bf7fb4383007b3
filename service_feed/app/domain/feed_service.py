"""
Feed orchestration: create feeds and serve them with lazy regeneration.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Dict, List, Optional, Protocol, Sequence

from shared.errors import FeedGenerationError, TokenNotFoundError
from shared.logging import get_logger, set_feed_token
from ..caching.feed_cache import FeedCache, FeedCacheEntry
from ..tokens.minter import TokenMinter
from .models import CalendarEntry

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector


class EntriesFetcher(Protocol):
    """Source of calendar entries."""

    async def fetch_entries(self) -> List[CalendarEntry]:
        ...


class DocumentEncoder(Protocol):
    """Turns calendar entries into a calendar document."""

    def encode(self, entries: Sequence[CalendarEntry]) -> str:
        ...


class FeedService:
    """
    Creates token-scoped feeds and resolves tokens to documents.

    Reads of a fresh entry never touch upstream. A stale entry is regenerated
    through the same fetch -> encode -> store path used at creation; the
    entry is only overwritten once a new document exists, so a failed
    refresh leaves the stale entry intact.

    With ``coalesce_refreshes`` concurrent stale reads of one token share a
    single regeneration and its outcome.
    """

    def __init__(
        self,
        cache: FeedCache,
        minter: TokenMinter,
        fetcher: EntriesFetcher,
        encoder: DocumentEncoder,
        *,
        metrics: Optional["MetricsCollector"] = None,
        coalesce_refreshes: bool = True,
        serve_stale_on_refresh_error: bool = False,
    ):
        self.cache = cache
        self.minter = minter
        self.fetcher = fetcher
        self.encoder = encoder
        self.metrics = metrics
        self.coalesce_refreshes = coalesce_refreshes
        self.serve_stale_on_refresh_error = serve_stale_on_refresh_error
        self.logger = get_logger("feed.service")
        self._refreshes: Dict[str, "asyncio.Future[FeedCacheEntry]"] = {}

    async def create_feed(self) -> FeedCacheEntry:
        """Mint a token and populate its feed."""
        token = self.minter.mint()
        set_feed_token(token)
        entry = await self._generate(token, reason="create")
        self.logger.info("Feed created", expires_at=entry.expires_at.isoformat())
        return entry

    async def read_feed(self, token: str) -> str:
        """Return the document for ``token``, regenerating it if stale."""
        set_feed_token(token)
        self.logger.info("Fetching iCal feed")
        entry = self.cache.lookup(token)
        if entry is None:
            self._record_lookup("miss")
            raise TokenNotFoundError()

        if not self.cache.is_stale(entry):
            self._record_lookup("hit")
            return entry.document

        self._record_lookup("stale")
        self.logger.info("Feed stale, regenerating", expired_at=entry.expires_at.isoformat())
        try:
            refreshed = await self._refresh(token)
        except FeedGenerationError as exc:
            if not self.serve_stale_on_refresh_error:
                raise
            self.logger.warning("Feed refresh failed, serving stale document", code=exc.code, error=exc.message)
            return entry.document
        return refreshed.document

    async def _refresh(self, token: str) -> FeedCacheEntry:
        if not self.coalesce_refreshes:
            return await self._generate(token, reason="refresh")

        pending = self._refreshes.get(token)
        if pending is None:
            pending = asyncio.ensure_future(self._generate(token, reason="refresh"))
            self._refreshes[token] = pending
            pending.add_done_callback(lambda done, token=token: self._finish_refresh(token, done))
        # shield: one waiter going away must not cancel the others' refresh
        return await asyncio.shield(pending)

    def _finish_refresh(self, token: str, done: "asyncio.Future[FeedCacheEntry]") -> None:
        if self._refreshes.get(token) is done:
            del self._refreshes[token]
        if not done.cancelled():
            # mark retrieved even if every waiter was cancelled
            done.exception()

    async def _generate(self, token: str, *, reason: str) -> FeedCacheEntry:
        try:
            entries = await self._fetch()
            document = self.encoder.encode(entries)
        except FeedGenerationError as exc:
            self._record_generation(reason, exc.code.lower())
            raise

        entry = self.cache.store(token, document)
        self._record_generation(reason, "ok")
        if self.metrics:
            self.metrics.set_gauge("feed_cache_entries", len(self.cache))
        self.logger.debug("Feed generated", reason=reason, entries=len(entries))
        return entry

    async def _fetch(self) -> List[CalendarEntry]:
        if self.metrics is None:
            return await self.fetcher.fetch_entries()
        with self.metrics.time_operation("upstream_fetch_duration_seconds"):
            return await self.fetcher.fetch_entries()

    def _record_lookup(self, result: str) -> None:
        if self.metrics:
            self.metrics.increment_counter("feed_cache_lookups_total", result=result)

    def _record_generation(self, reason: str, outcome: str) -> None:
        if self.metrics:
            self.metrics.increment_counter("feed_generations_total", reason=reason, outcome=outcome)

