"""
Calendar entry data model for the Feed Service.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CalendarEntry(BaseModel):
    """A single time-stamped entry as delivered by the upstream source."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    start: datetime = Field(..., alias="dateStart", description="Entry start time")
    end: datetime = Field(..., alias="dateEnd", description="Entry end time")
    description: str = Field(..., description="Entry summary text")

    @field_validator("start", "end")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Naive upstream timestamps are UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
