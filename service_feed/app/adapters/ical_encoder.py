"""
iCalendar document encoder for the Feed Service.
"""

from datetime import timezone
from typing import Sequence

from icalendar import Calendar, Event

from shared.errors import EncodeFailedError
from ..domain.models import CalendarEntry

DEFAULT_PRODID = "-//Calendar Feed Service//Feed 1.0//EN"
DEFAULT_SCALE = "GREGORIAN"


class ICalendarEncoder:
    """Serializes calendar entries into an RFC 5545 document.

    The output depends only on the entries: no UIDs or DTSTAMPs are
    generated, so equal input always encodes to identical text.
    """

    def __init__(self, prodid: str = DEFAULT_PRODID, scale: str = DEFAULT_SCALE):
        self.prodid = prodid
        self.scale = scale

    def encode(self, entries: Sequence[CalendarEntry]) -> str:
        calendar = Calendar()
        calendar.add("version", "2.0")
        calendar.add("prodid", self.prodid)
        calendar.add("calscale", self.scale)

        for entry in entries:
            event = Event()
            event.add("dtstart", entry.start.astimezone(timezone.utc))
            event.add("dtend", entry.end.astimezone(timezone.utc))
            event.add("summary", entry.description)
            calendar.add_component(event)

        try:
            return calendar.to_ical(sorted=False).decode("utf-8")
        except (ValueError, TypeError) as exc:
            raise EncodeFailedError(
                "could not encode calendar",
                details={"entries": len(entries), "error": str(exc)}
            ) from exc
