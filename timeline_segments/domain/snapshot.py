"""Immutable point-in-time views of a segment.

These are pure data structures.  They hold what a segment's derived
accessors reported at the moment the snapshot was taken.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from timeline_segments.domain.enums import ActivityTypeName, RecordingState
from timeline_segments.domain.location import Location


class DateRange(BaseModel):
    """A closed time interval."""

    start: datetime
    end: datetime

    model_config = {"frozen": True}

    @property
    def duration(self) -> float:
        """Seconds from start to end."""
        return (self.end - self.start).total_seconds()


class SegmentSnapshot(BaseModel):
    """Immutable summary of a segment's derived values."""

    sample_count: int = Field(..., description="Number of member samples (boundary excluded)")
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    duration_seconds: float = Field(..., description="0 when the date range is undefined")
    distance_metres: float
    center: Optional[Location] = None
    radius_mean_metres: float
    radius_sd_metres: float
    activity_type: Optional[ActivityTypeName] = None
    recording_state: Optional[RecordingState] = None
    is_valid: bool
    is_worth_keeping: bool

    model_config = {"frozen": True}
