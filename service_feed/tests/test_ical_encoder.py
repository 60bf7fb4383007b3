"""
Unit tests for the iCalendar document encoder.
"""

from datetime import datetime, timezone

import pytest
from icalendar import Calendar

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from service_feed.app.adapters.ical_encoder import ICalendarEncoder
from service_feed.app.domain.models import CalendarEntry
from shared.test_helpers import TestDataFactory


def _entries(*descriptions):
    return [CalendarEntry.model_validate(p) for p in TestDataFactory.create_entry_payloads(*descriptions)]


class TestICalendarEncoder:
    """Test cases for ICalendarEncoder."""

    @pytest.fixture
    def encoder(self):
        """Create ICalendarEncoder instance."""
        return ICalendarEncoder()

    def test_single_entry_becomes_one_event(self, encoder):
        """One entry yields one VEVENT with start, end and summary."""
        document = encoder.encode([
            CalendarEntry(start="2024-01-08T09:00:00Z", end="2024-01-08T09:15:00Z", description="Standup")
        ])

        assert document.startswith("BEGIN:VCALENDAR\r\n")
        assert document.rstrip().endswith("END:VCALENDAR")
        assert document.count("BEGIN:VEVENT") == 1
        assert "DTSTART:20240108T090000Z\r\n" in document
        assert "DTEND:20240108T091500Z\r\n" in document
        assert "SUMMARY:Standup\r\n" in document

    def test_calendar_carries_scale_identifier(self, encoder):
        """The container declares the calendar scale."""
        document = encoder.encode([])

        assert "CALSCALE:GREGORIAN\r\n" in document
        assert "VERSION:2.0\r\n" in document
        assert "BEGIN:VEVENT" not in document

    def test_custom_scale_and_prodid(self):
        """Scale and product id are configurable."""
        document = ICalendarEncoder(prodid="-//Test//EN", scale="ISO").encode([])

        assert "CALSCALE:ISO\r\n" in document
        assert "PRODID:-//Test//EN\r\n" in document

    def test_event_fields_are_in_start_end_summary_order(self, encoder):
        """Each event lists DTSTART, then DTEND, then SUMMARY."""
        document = encoder.encode(_entries("Standup"))
        event = document[document.index("BEGIN:VEVENT"):document.index("END:VEVENT")]

        assert event.index("DTSTART") < event.index("DTEND") < event.index("SUMMARY")

    def test_entry_order_is_preserved(self, encoder):
        """Events appear in the order the entries were fetched."""
        document = encoder.encode(list(reversed(_entries("A", "B", "C"))))

        assert document.index("SUMMARY:C") < document.index("SUMMARY:B") < document.index("SUMMARY:A")

    def test_encoding_is_deterministic(self, encoder):
        """Same input, byte-identical output."""
        entries = _entries("Standup", "Review")

        assert encoder.encode(entries) == encoder.encode(entries)
        assert ICalendarEncoder().encode(entries) == encoder.encode(entries)

    def test_offset_times_are_rendered_in_utc(self, encoder):
        """Offsets are normalized to UTC."""
        document = encoder.encode([
            CalendarEntry(start="2024-01-08T10:00:00+01:00", end="2024-01-08T11:00:00+01:00", description="Offset")
        ])

        assert "DTSTART:20240108T090000Z\r\n" in document
        assert "DTEND:20240108T100000Z\r\n" in document

    def test_document_parses_back(self, encoder):
        """A calendar client can read the produced document."""
        document = encoder.encode(_entries("Standup"))

        parsed = Calendar.from_ical(document)
        events = parsed.walk("VEVENT")
        assert len(events) == 1
        assert str(events[0]["SUMMARY"]) == "Standup"
        assert events[0].decoded("DTSTART") == datetime(2024, 1, 8, 9, 0, tzinfo=timezone.utc)
        assert events[0].decoded("DTEND") == datetime(2024, 1, 8, 9, 30, tzinfo=timezone.utc)

    def test_summary_text_is_escaped(self, encoder):
        """Commas and semicolons in descriptions are escaped, not split."""
        document = encoder.encode([
            CalendarEntry(start="2024-01-08T09:00:00Z", end="2024-01-08T10:00:00Z", description="Plan; review, ship")
        ])

        assert r"SUMMARY:Plan\; review\, ship" + "\r\n" in document
