"""ItemSegment — a run of compatible samples within a timeline item.

A segment owns a set of samples that share a compatible activity type and
recording state, plus an optional boundary sample (``end_sample``) that
marks where it ends.  The boundary is normally a member of the following
segment and is shared read-only.

Derived values (sorted samples, date range, centre, radius, distance and
classifier results) are computed lazily and cached.  Every mutation goes
through ``samples_changed()``, which drops all of them together.

The segment does not decide when segments are created or merged.  It only
answers whether a sample may join it and whether it is valid or worth
keeping.
"""

from __future__ import annotations

import logging
import weakref
from datetime import datetime, timezone
from typing import Iterable
from uuid import UUID

from timeline_segments.domain.classifier import ClassifierResults
from timeline_segments.domain.enums import (
    ActivityTypeName,
    RecordingState,
    is_off_state,
    is_sleep_state,
)
from timeline_segments.domain.geometry import Radius, path_distance, weighted_center
from timeline_segments.domain.location import Location
from timeline_segments.domain.sample import LocomotionSample
from timeline_segments.domain.snapshot import DateRange, SegmentSnapshot
from timeline_segments.domain.thresholds import SegmentThresholds
from timeline_segments.domain.timeline import TimelineItem

logger = logging.getLogger(__name__)


def _aware(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _sort_key(sample: LocomotionSample) -> tuple[datetime, UUID]:
    return (sample.date, sample.sample_id)


class ItemSegment:
    """A mutable sample container with lazily cached derived values.

    Not thread-safe.  Callers sharing a segment across threads must
    serialise access themselves.
    """

    __slots__ = (
        "_timeline_item",
        "_thresholds",
        "_unsorted_samples",
        "_end_sample",
        "_manual_start_date",
        "_manual_end_date",
        "_manual_recording_state",
        "_manual_activity_type",
        "_samples",
        "_date_range",
        "_center",
        "_radius",
        "_distance",
        "_classifier_results",
        "_unfiltered_classifier_results",
    )

    def __init__(
        self,
        samples: Iterable[LocomotionSample] = (),
        timeline_item: TimelineItem | None = None,
        thresholds: SegmentThresholds | None = None,
    ) -> None:
        self._timeline_item: weakref.ref | None = (
            weakref.ref(timeline_item) if timeline_item is not None else None
        )
        self._thresholds = thresholds or SegmentThresholds.from_settings()
        self._unsorted_samples: set[LocomotionSample] = set()
        self._end_sample: LocomotionSample | None = None

        self._manual_start_date: datetime | None = None
        self._manual_end_date: datetime | None = None
        self._manual_recording_state: RecordingState | None = None
        self._manual_activity_type: ActivityTypeName | None = None

        self._samples: list[LocomotionSample] | None = None
        self._date_range: DateRange | None = None
        self._center: Location | None = None
        self._radius: Radius | None = None
        self._distance: float | None = None
        self._classifier_results: ClassifierResults | None = None
        self._unfiltered_classifier_results: ClassifierResults | None = None

        self.add(samples)

    @classmethod
    def placeholder(
        cls,
        start_date: datetime,
        activity_type: ActivityTypeName,
        recording_state: RecordingState,
        thresholds: SegmentThresholds | None = None,
    ) -> ItemSegment:
        """Create an empty segment whose start, type and state are fixed manually.

        Samples may be added later; the manual values keep precedence.
        """
        segment = cls(thresholds=thresholds)
        segment._manual_start_date = _aware(start_date)
        segment._manual_activity_type = activity_type
        segment._manual_recording_state = recording_state
        return segment

    # ── Owner ────────────────────────────────────────────────────────────

    @property
    def timeline_item(self) -> TimelineItem | None:
        """The owning item, or None if there is none or it has been collected."""
        if self._timeline_item is None:
            return None
        return self._timeline_item()

    @timeline_item.setter
    def timeline_item(self, item: TimelineItem | None) -> None:
        self._timeline_item = weakref.ref(item) if item is not None else None
        self.samples_changed()

    @property
    def thresholds(self) -> SegmentThresholds:
        return self._thresholds

    def _in_moving_path(self) -> bool:
        item = self.timeline_item
        return item is not None and item.is_path and not item.is_data_gap

    # ── Mutation ─────────────────────────────────────────────────────────

    def add(self, samples: LocomotionSample | Iterable[LocomotionSample]) -> None:
        """Add one sample or many.  Samples already present are ignored."""
        if isinstance(samples, LocomotionSample):
            samples = (samples,)
        self._unsorted_samples.update(samples)
        self.samples_changed()

    def remove(self, samples: LocomotionSample | Iterable[LocomotionSample]) -> None:
        """Remove one sample or many.  Non-members are ignored."""
        if isinstance(samples, LocomotionSample):
            samples = (samples,)
        self._unsorted_samples.difference_update(samples)
        self.samples_changed()

    @property
    def end_sample(self) -> LocomotionSample | None:
        """Boundary sample marking the end of this segment, outside ``samples``."""
        return self._end_sample

    @end_sample.setter
    def end_sample(self, sample: LocomotionSample | None) -> None:
        self._end_sample = sample
        self.samples_changed()

    def samples_changed(self) -> None:
        """Drop every derived cache."""
        self._samples = None
        self._date_range = None
        self._center = None
        self._radius = None
        self._distance = None
        self._classifier_results = None
        self._unfiltered_classifier_results = None

    # ── Samples ──────────────────────────────────────────────────────────

    @property
    def samples(self) -> list[LocomotionSample]:
        """Members sorted by date, ties ordered by ``sample_id``.

        Returns a copy; mutating it does not affect the segment.
        """
        return list(self._sorted())

    @property
    def sample_count(self) -> int:
        return len(self._unsorted_samples)

    def __contains__(self, sample: object) -> bool:
        return sample in self._unsorted_samples

    def _sorted(self) -> list[LocomotionSample]:
        if self._samples is None:
            self._samples = sorted(self._unsorted_samples, key=_sort_key)
        return self._samples

    def _first_sample(self) -> LocomotionSample | None:
        # reads the sorted cache if present but never builds it
        if self._samples is not None:
            return self._samples[0] if self._samples else None
        if not self._unsorted_samples:
            return None
        return min(self._unsorted_samples, key=_sort_key)

    def _usable_locations(self) -> list[Location]:
        return [s.location for s in self._sorted() if s.has_usable_coordinate]

    # ── Dates ────────────────────────────────────────────────────────────

    @property
    def start_date(self) -> datetime | None:
        if self._manual_start_date is not None:
            return self._manual_start_date
        ordered = self._sorted()
        return ordered[0].date if ordered else None

    @property
    def end_date(self) -> datetime | None:
        if self._manual_end_date is not None:
            return self._manual_end_date
        if self._end_sample is not None:
            return self._end_sample.date
        ordered = self._sorted()
        return ordered[-1].date if ordered else None

    @end_date.setter
    def end_date(self, value: datetime | None) -> None:
        self._manual_end_date = _aware(value)
        self.samples_changed()

    @property
    def date_range(self) -> DateRange | None:
        if self._date_range is None:
            start, end = self.start_date, self.end_date
            if start is not None and end is not None:
                self._date_range = DateRange(start=start, end=end)
        return self._date_range

    @property
    def duration(self) -> float:
        """Seconds covered by the date range, 0.0 if it is undefined."""
        date_range = self.date_range
        return date_range.duration if date_range is not None else 0.0

    # ── Classification context ───────────────────────────────────────────

    @property
    def recording_state(self) -> RecordingState | None:
        if self._manual_recording_state is not None:
            return self._manual_recording_state
        # paths only exist while recording, so their segments always count as recording
        if self._in_moving_path():
            return RecordingState.RECORDING
        first = self._first_sample()
        return first.recording_state if first else None

    @property
    def activity_type(self) -> ActivityTypeName | None:
        if self._manual_activity_type is not None:
            return self._manual_activity_type
        first = self._first_sample()
        return first.activity_type if first else None

    # ── Geometry ─────────────────────────────────────────────────────────

    @property
    def center(self) -> Location | None:
        """Accuracy-weighted centre of the member samples."""
        if self._center is None:
            self._center = weighted_center(self._usable_locations())
        return self._center

    @property
    def radius(self) -> Radius:
        if self._radius is None:
            center = self.center
            if center is None:
                self._radius = Radius.ZERO
            else:
                self._radius = Radius.from_center(self._usable_locations(), center)
        return self._radius

    @property
    def distance(self) -> float:
        """Metres travelled between consecutive samples, in date order."""
        if self._distance is None:
            self._distance = path_distance(self._usable_locations())
        return self._distance

    # ── Keepness ─────────────────────────────────────────────────────────

    @property
    def is_valid(self) -> bool:
        t = self._thresholds
        if self.activity_type == ActivityTypeName.STATIONARY:
            if not self._unsorted_samples:
                return False
            if self.duration < t.visit_minimum_valid_duration:
                return False
        else:
            if len(self._unsorted_samples) < t.path_minimum_valid_samples:
                return False
            if self.duration < t.path_minimum_valid_duration:
                return False
            if self.distance < t.path_minimum_valid_distance:
                return False
        return True

    @property
    def is_invalid(self) -> bool:
        return not self.is_valid

    @property
    def is_worth_keeping(self) -> bool:
        """Stricter than ``is_valid``: long (and far) enough to retain."""
        if not self.is_valid:
            return False
        t = self._thresholds
        if self.activity_type == ActivityTypeName.STATIONARY:
            if self.duration < t.visit_minimum_keeper_duration:
                return False
        else:
            if self.duration < t.path_minimum_keeper_duration:
                return False
            if self.distance < t.path_minimum_keeper_distance:
                return False
        return True

    # ── Classifier results ───────────────────────────────────────────────

    @property
    def classifier_results(self) -> ClassifierResults | None:
        return self.classifier_results_for(filtered=True)

    @property
    def unfiltered_classifier_results(self) -> ClassifierResults | None:
        return self.classifier_results_for(filtered=False)

    def classifier_results_for(self, filtered: bool) -> ClassifierResults | None:
        """Classify via the owner's classifier, caching only final results.

        Results flagged ``more_coming`` are returned as-is and not cached,
        so the next call asks the classifier again.
        """
        cached = self._classifier_results if filtered else self._unfiltered_classifier_results
        if cached is not None:
            return cached

        item = self.timeline_item
        classifier = item.classifier if item is not None else None
        if classifier is None:
            return None

        results = classifier.classify(self, filtered=filtered)
        if results is None:
            return None
        if results.more_coming:
            logger.debug("Classifier results pending (filtered=%s), not caching", filtered)
            return results

        if filtered:
            self._classifier_results = results
        else:
            self._unfiltered_classifier_results = results
        return results

    # ── Compatibility ────────────────────────────────────────────────────

    def can_add(self, sample: LocomotionSample) -> bool:
        """Return True if *sample* is compatible with this segment.

        Read-only: consults current state without touching any cache.
        """
        activity_type = self.activity_type
        recording_state = self.recording_state

        # recording state mismatches don't matter inside moving paths
        if self._in_moving_path() and sample.activity_type == activity_type:
            return True

        if sample.recording_state == recording_state and sample.activity_type == activity_type:
            return True

        if recording_state is None:
            return False

        # off samples go together regardless of activity type
        if is_off_state(recording_state) and is_off_state(sample.recording_state):
            return True

        # likewise for sleep-like states
        if is_sleep_state(recording_state) and is_sleep_state(sample.recording_state):
            return True

        return False

    # ── Summary ──────────────────────────────────────────────────────────

    def summary(self) -> dict:
        """Structural facts suitable for logging."""
        start, end = self.start_date, self.end_date
        return {
            "sample_count": self.sample_count,
            "start_date": start.isoformat() if start else None,
            "end_date": end.isoformat() if end else None,
            "activity_type": self.activity_type.value if self.activity_type else None,
            "recording_state": self.recording_state.value if self.recording_state else None,
            "duration_seconds": round(self.duration, 3),
            "distance_metres": round(self.distance, 3),
        }

    def snapshot(self) -> SegmentSnapshot:
        """Create an immutable snapshot of the segment's current derived values."""
        radius = self.radius
        return SegmentSnapshot(
            sample_count=self.sample_count,
            start_date=self.start_date,
            end_date=self.end_date,
            duration_seconds=self.duration,
            distance_metres=self.distance,
            center=self.center,
            radius_mean_metres=radius.mean,
            radius_sd_metres=radius.sd,
            activity_type=self.activity_type,
            recording_state=self.recording_state,
            is_valid=self.is_valid,
            is_worth_keeping=self.is_worth_keeping,
        )

    # ── Dunder ───────────────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        """Shallow equality: same date range and same number of samples."""
        if not isinstance(other, ItemSegment):
            return NotImplemented
        return self.date_range == other.date_range and self.sample_count == other.sample_count

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        activity = self.activity_type.value if self.activity_type else None
        return (
            f"ItemSegment(samples={self.sample_count}, "
            f"type={activity}, "
            f"duration={self.duration:.1f}s)"
        )
