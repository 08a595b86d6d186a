"""TimelineItem — the owner a segment reads context from.

Segments hold only a weak reference to their item, so implementations
must be weak-referenceable (ordinary classes are; classes that define
``__slots__`` need a ``__weakref__`` slot).
"""

from __future__ import annotations

from typing import Optional, Protocol

from timeline_segments.domain.classifier import Classifier


class TimelineItem(Protocol):
    """Protocol for the timeline item that owns a segment."""

    @property
    def is_path(self) -> bool:
        """True for continuous-motion items, False for visits."""
        ...

    @property
    def is_data_gap(self) -> bool:
        """True if the item stands for missing data rather than real motion."""
        ...

    @property
    def classifier(self) -> Optional[Classifier]:
        ...
