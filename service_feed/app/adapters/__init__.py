"""
Adapters package for the Feed Service.

Contains the collaborators the feed cache regenerates from:

- EntriesClient: HTTP client for the upstream JSON entries endpoint
- ICalendarEncoder: serializes entries into an iCalendar document

Adapters map their failures onto shared errors and never retry.
"""

from .entries_client import EntriesClient
from .ical_encoder import ICalendarEncoder

__all__ = [
    "EntriesClient",
    "ICalendarEncoder",
]
