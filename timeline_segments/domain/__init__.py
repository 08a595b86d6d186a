from timeline_segments.domain.enums import ActivityTypeName, RecordingState
from timeline_segments.domain.location import Location
from timeline_segments.domain.sample import LocomotionSample
from timeline_segments.domain.segment import ItemSegment
from timeline_segments.domain.thresholds import SegmentThresholds

__all__ = [
    "ActivityTypeName",
    "RecordingState",
    "Location",
    "LocomotionSample",
    "ItemSegment",
    "SegmentThresholds",
]
