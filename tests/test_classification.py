"""Tests for classifier-result caching on ItemSegment."""

import gc

import pytest

from timeline_segments.domain.classifier import ClassifierResultItem, ClassifierResults
from timeline_segments.domain.enums import ActivityTypeName
from timeline_segments.domain.segment import ItemSegment

from tests.test_sample import _sample
from tests.test_segment import _Item

_PENDING = ClassifierResults(
    results=[ClassifierResultItem(name=ActivityTypeName.WALKING, score=0.4)],
    more_coming=True,
)
_FINAL = ClassifierResults(
    results=[
        ClassifierResultItem(name=ActivityTypeName.WALKING, score=0.7),
        ClassifierResultItem(name=ActivityTypeName.RUNNING, score=0.2),
    ],
    more_coming=False,
)


class _ScriptedClassifier:
    """Returns queued responses in order, repeating the last one forever."""

    def __init__(self, *responses: ClassifierResults | None) -> None:
        self._responses = list(responses)
        self.calls: list[bool] = []

    def classify(self, segment: ItemSegment, filtered: bool) -> ClassifierResults | None:
        self.calls.append(filtered)
        if len(self._responses) > 1:
            return self._responses.pop(0)
        return self._responses[0]


def _segment_with(classifier) -> tuple[ItemSegment, _Item]:
    item = _Item(is_path=True, classifier=classifier)
    return ItemSegment([_sample(0), _sample(10, north_m=20)], timeline_item=item), item


class TestClassifierResults:
    def test_best_match(self) -> None:
        assert _FINAL.best_match is not None
        assert _FINAL.best_match.name == ActivityTypeName.WALKING

    def test_best_match_empty(self) -> None:
        assert ClassifierResults().best_match is None

    def test_score_for(self) -> None:
        assert _FINAL.score_for(ActivityTypeName.RUNNING) == 0.2
        assert _FINAL.score_for(ActivityTypeName.CAR) == 0.0

    def test_score_out_of_range_rejected(self) -> None:
        with pytest.raises(Exception):
            ClassifierResultItem(name=ActivityTypeName.CAR, score=1.5)


class TestClassifierCaching:
    def test_pending_twice_then_final(self) -> None:
        classifier = _ScriptedClassifier(_PENDING, _PENDING, _FINAL)
        seg, _item = _segment_with(classifier)

        assert seg.classifier_results is _PENDING
        assert seg.classifier_results is _PENDING
        assert seg.classifier_results is _FINAL
        assert len(classifier.calls) == 3

        assert seg.classifier_results is _FINAL
        assert seg.classifier_results is _FINAL
        assert len(classifier.calls) == 3

    def test_filtered_and_unfiltered_cached_separately(self) -> None:
        classifier = _ScriptedClassifier(_FINAL)
        seg, _item = _segment_with(classifier)

        seg.classifier_results
        seg.unfiltered_classifier_results
        seg.classifier_results
        seg.unfiltered_classifier_results
        assert classifier.calls == [True, False]

    def test_mutation_clears_both_caches(self) -> None:
        classifier = _ScriptedClassifier(_FINAL)
        seg, _item = _segment_with(classifier)
        seg.classifier_results
        seg.unfiltered_classifier_results

        seg.add(_sample(20, north_m=40))
        seg.classifier_results
        seg.unfiltered_classifier_results
        assert classifier.calls == [True, False, True, False]

    @pytest.mark.parametrize("mutation", ["add", "remove", "end_sample", "end_date"])
    def test_every_mutation_clears_cache(self, mutation: str) -> None:
        classifier = _ScriptedClassifier(_FINAL)
        seg, _item = _segment_with(classifier)
        seg.classifier_results

        if mutation == "add":
            seg.add(_sample(30))
        elif mutation == "remove":
            seg.remove(seg.samples[0])
        elif mutation == "end_sample":
            seg.end_sample = _sample(40)
        else:
            seg.end_date = _sample(50).date

        seg.classifier_results
        assert len(classifier.calls) == 2

    def test_classifier_receives_segment(self) -> None:
        received = []

        class _Recorder:
            def classify(self, segment, filtered):
                received.append((segment, filtered))
                return _FINAL

        seg, _item = _segment_with(_Recorder())
        seg.unfiltered_classifier_results
        assert received == [(seg, False)]

    def test_none_result_is_not_cached(self) -> None:
        classifier = _ScriptedClassifier(None)
        seg, _item = _segment_with(classifier)
        assert seg.classifier_results is None
        assert seg.classifier_results is None
        assert len(classifier.calls) == 2


class TestMissingOwner:
    def test_no_owner(self) -> None:
        seg = ItemSegment([_sample(0)])
        assert seg.classifier_results is None
        assert seg.unfiltered_classifier_results is None

    def test_owner_without_classifier(self) -> None:
        item = _Item()
        seg = ItemSegment([_sample(0)], timeline_item=item)
        assert seg.timeline_item is item
        assert seg.classifier_results is None

    def test_dead_owner(self) -> None:
        classifier = _ScriptedClassifier(_FINAL)
        seg, item = _segment_with(classifier)
        del item
        gc.collect()
        assert seg.classifier_results is None
        assert classifier.calls == []
