"""Validity and keeper thresholds for visit-kind and path-kind segments.

Valid thresholds decide whether a segment is structurally sound; keeper
thresholds are the stricter bar for whether it deserves to be retained.
"""

from __future__ import annotations

from dataclasses import dataclass

from timeline_segments.config import Settings, settings


@dataclass(frozen=True)
class SegmentThresholds:
    """Configurable thresholds (seconds, metres, sample counts).

    Every keeper threshold must be at least its valid counterpart.
    """

    visit_minimum_valid_duration: float = 10.0
    visit_minimum_keeper_duration: float = 120.0

    path_minimum_valid_samples: int = 2
    path_minimum_valid_duration: float = 10.0
    path_minimum_valid_distance: float = 10.0
    path_minimum_keeper_duration: float = 60.0
    path_minimum_keeper_distance: float = 20.0

    def __post_init__(self) -> None:
        if self.visit_minimum_keeper_duration < self.visit_minimum_valid_duration:
            raise ValueError("visit_minimum_keeper_duration must not be below visit_minimum_valid_duration")
        if self.path_minimum_keeper_duration < self.path_minimum_valid_duration:
            raise ValueError("path_minimum_keeper_duration must not be below path_minimum_valid_duration")
        if self.path_minimum_keeper_distance < self.path_minimum_valid_distance:
            raise ValueError("path_minimum_keeper_distance must not be below path_minimum_valid_distance")
        if self.path_minimum_valid_samples < 0:
            raise ValueError("path_minimum_valid_samples must not be negative")

    @classmethod
    def from_settings(cls, source: Settings | None = None) -> SegmentThresholds:
        s = source or settings
        return cls(
            visit_minimum_valid_duration=s.visit_minimum_valid_duration,
            visit_minimum_keeper_duration=s.visit_minimum_keeper_duration,
            path_minimum_valid_samples=s.path_minimum_valid_samples,
            path_minimum_valid_duration=s.path_minimum_valid_duration,
            path_minimum_valid_distance=s.path_minimum_valid_distance,
            path_minimum_keeper_duration=s.path_minimum_keeper_duration,
            path_minimum_keeper_distance=s.path_minimum_keeper_distance,
        )
