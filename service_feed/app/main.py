"""
Calendar feed service.

Exposes a create endpoint that mints a feed token and a token-scoped read
endpoint that serves the cached iCalendar document.
"""

from datetime import timedelta
from typing import Dict, Optional

from fastapi.responses import PlainTextResponse, Response

from shared.base_service import BaseService
from shared.config import ServiceConfig, get_config
from shared.errors import TokenNotFoundError

from .adapters.entries_client import EntriesClient
from .adapters.ical_encoder import ICalendarEncoder
from .caching.feed_cache import Clock, FeedCache, utc_now
from .domain.feed_service import DocumentEncoder, EntriesFetcher, FeedService
from .tokens.minter import TokenMinter

CALENDAR_MEDIA_TYPE = "text/calendar; charset=utf-8"
CALENDAR_DISPOSITION = 'inline; filename="calendar.ics"'


class CalendarFeedService(BaseService):
    """Calendar feed service implementation."""

    def __init__(
        self,
        config: Optional[ServiceConfig] = None,
        *,
        fetcher: Optional[EntriesFetcher] = None,
        encoder: Optional[DocumentEncoder] = None,
        clock: Clock = utc_now,
    ):
        super().__init__("feed", config or get_config("feed"))

        # Initialize components
        self.cache = FeedCache(timedelta(seconds=self.config.cache_ttl_seconds), clock=clock)
        self.minter = TokenMinter(self.config.token_bytes)
        self.fetcher = fetcher or EntriesClient(
            self.config.upstream_url,
            timeout=self.config.upstream_timeout_seconds
        )
        self.encoder = encoder or ICalendarEncoder(
            prodid=self.config.calendar_prodid,
            scale=self.config.calendar_scale
        )
        self.feeds = FeedService(
            self.cache,
            self.minter,
            self.fetcher,
            self.encoder,
            metrics=self.metrics,
            coalesce_refreshes=self.config.coalesce_refreshes,
            serve_stale_on_refresh_error=self.config.serve_stale_on_refresh_error,
        )

        self._setup_feed_routes()

    def _setup_feed_routes(self):
        """Set up feed-specific routes."""
        feed_prefix = self.config.feed_path_prefix.rstrip("/") + "/"
        feed_path = feed_prefix + "{token}"

        @self.app.on_event("shutdown")
        async def _shutdown():
            close = getattr(self.fetcher, "close", None)
            if close is not None:
                await close()

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": "feed",
                "message": "Calendar Feed Service",
                "version": "1.0.0",
                "endpoints": {"create": self.config.create_path, "feed": feed_path},
            }

        @self.app.get(self.config.create_path, response_class=PlainTextResponse)
        async def create_feed():
            """Mint a feed token and populate its feed."""
            entry = await self.feeds.create_feed()
            return PlainTextResponse(f"FeedToken: {entry.token}")

        @self.app.get(feed_path)
        async def read_feed(token: str):
            """Serve the calendar document for a token."""
            document = await self.feeds.read_feed(token)
            return Response(
                content=document,
                media_type=CALENDAR_MEDIA_TYPE,
                headers={"Content-Disposition": CALENDAR_DISPOSITION},
            )

        @self.app.get(feed_prefix)
        async def read_feed_without_token():
            """An empty token never names a feed."""
            raise TokenNotFoundError()

    async def _check_dependencies(self) -> Dict[str, str]:
        """Report feed cache state; upstream is only contacted on demand."""
        return {
            "feed_cache": "ok",
            "cached_feeds": str(len(self.cache)),
        }


def create_app():
    """Create calendar feed service application."""
    service = CalendarFeedService()
    return service.app


if __name__ == "__main__":
    service = CalendarFeedService()
    service.run()
