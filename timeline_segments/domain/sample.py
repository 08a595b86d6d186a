"""LocomotionSample — a timestamped location/motion observation.

Samples are immutable once created.  A sample may be shared between two
adjacent segments, as one segment's boundary and the next one's member.

Equality and hashing use ``sample_id`` only: two samples carrying the same
values are still distinct set members unless they share an identifier.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from timeline_segments.domain.enums import ActivityTypeName, RecordingState
from timeline_segments.domain.location import Location
from timeline_segments.foundation.identifiers import new_sample_id


class LocomotionSample(BaseModel):
    """A single sample in a location timeline."""

    sample_id: UUID = Field(default_factory=new_sample_id)
    date: datetime = Field(..., description="When the sample was taken (UTC-aware)")
    location: Optional[Location] = None
    activity_type: Optional[ActivityTypeName] = None
    recording_state: RecordingState = RecordingState.RECORDING

    model_config = {"frozen": True}

    @field_validator("date")
    @classmethod
    def date_must_be_aware(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            v = v.replace(tzinfo=timezone.utc)
        return v

    @property
    def has_usable_coordinate(self) -> bool:
        return self.location is not None and self.location.has_usable_coordinate

    # ── Identity ─────────────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LocomotionSample):
            return NotImplemented
        return self.sample_id == other.sample_id

    def __hash__(self) -> int:
        return hash(self.sample_id)

    def __repr__(self) -> str:
        return (
            f"LocomotionSample(id={self.sample_id!s}, "
            f"date={self.date.isoformat()}, "
            f"type={self.activity_type.value if self.activity_type else None}, "
            f"state={self.recording_state.value})"
        )
