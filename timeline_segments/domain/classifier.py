"""Activity-type classification contract.

The classifier itself lives outside this package.  A segment only needs
to hand itself over and receive a ``ClassifierResults``, which may be
partial while the classifier is still loading its models.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

from pydantic import BaseModel, Field

from timeline_segments.domain.enums import ActivityTypeName

if TYPE_CHECKING:
    from timeline_segments.domain.segment import ItemSegment


class ClassifierResultItem(BaseModel):
    """Score for a single activity type."""

    name: ActivityTypeName
    score: float = Field(..., ge=0.0, le=1.0)

    model_config = {"frozen": True}


class ClassifierResults(BaseModel):
    """A ranked set of activity-type scores.

    ``more_coming`` is True while the classifier is still producing
    results.  Such a set is provisional and must not be cached.
    """

    results: list[ClassifierResultItem] = Field(default_factory=list)
    more_coming: bool = False

    model_config = {"frozen": True}

    @property
    def best_match(self) -> Optional[ClassifierResultItem]:
        if not self.results:
            return None
        return max(self.results, key=lambda item: item.score)

    def score_for(self, name: ActivityTypeName) -> float:
        for item in self.results:
            if item.name == name:
                return item.score
        return 0.0


class Classifier(Protocol):
    """Protocol for anything that can classify a segment."""

    def classify(self, segment: "ItemSegment", filtered: bool) -> ClassifierResults | None:
        """Classify *segment*.  *filtered* selects the filtered result set."""
        ...
