"""
Domain package for the Feed Service.

Holds the calendar entry model and the orchestration that ties token
minting, upstream fetches, encoding and the feed cache together.
"""

from .models import CalendarEntry
from .feed_service import DocumentEncoder, EntriesFetcher, FeedService

__all__ = [
    "CalendarEntry",
    "DocumentEncoder",
    "EntriesFetcher",
    "FeedService",
]
