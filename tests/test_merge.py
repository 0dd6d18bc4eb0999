"""Tests for overlaying AI-suggested counts onto current counts."""

from __future__ import annotations

from typing import Any

import pytest

from ucp_estimator.merge import MergeDecision, merge_suggestion, merge_with_decisions
from ucp_estimator.models.counts import AnalysisSuggestion, ComplexityCount, UcpCounts


def _counts() -> UcpCounts:
    return UcpCounts(
        uaw=ComplexityCount(simple=1, average=2, complex=3),
        uucw=ComplexityCount(simple=4, average=5, complex=6),
    )


def _suggestion(payload: dict[str, Any]) -> AnalysisSuggestion:
    return AnalysisSuggestion.model_validate(payload)


class TestIdentity:
    def test_none_suggestion(self) -> None:
        assert merge_suggestion(_counts(), None) == _counts()

    def test_empty_suggestion(self) -> None:
        assert merge_suggestion(_counts(), _suggestion({})) == _counts()

    def test_empty_category(self) -> None:
        assert merge_suggestion(_counts(), _suggestion({"uaw": {}})) == _counts()

    def test_both_categories_empty(self) -> None:
        merged = merge_suggestion(_counts(), _suggestion({"uaw": {}, "uucw": {}}))
        assert merged == _counts()

    def test_null_fields(self) -> None:
        merged = merge_suggestion(
            _counts(), _suggestion({"uaw": {"simple": None, "complex": None}})
        )
        assert merged == _counts()

    def test_identity_returns_new_object(self) -> None:
        current = _counts()
        merged = merge_suggestion(current, None)
        merged.uaw.simple = 99
        assert current.uaw.simple == 1.0


class TestOverwrite:
    def test_single_field(self) -> None:
        merged = merge_suggestion(_counts(), _suggestion({"uaw": {"simple": 9}}))
        assert merged == UcpCounts(
            uaw=ComplexityCount(simple=9, average=2, complex=3),
            uucw=ComplexityCount(simple=4, average=5, complex=6),
        )

    def test_full_replacement_of_one_category(self) -> None:
        merged = merge_suggestion(
            _counts(),
            _suggestion({"uucw": {"simple": 0, "average": 0, "complex": 8}}),
        )
        assert merged.uaw == _counts().uaw
        assert merged.uucw == ComplexityCount(simple=0, average=0, complex=8)

    def test_zero_overwrites(self) -> None:
        """Zero is a provided value, not an absence."""
        merged = merge_suggestion(_counts(), _suggestion({"uucw": {"average": 0}}))
        assert merged.uucw.average == 0.0

    def test_both_categories_partially(self) -> None:
        merged = merge_suggestion(
            _counts(),
            _suggestion({"uaw": {"complex": 7}, "uucw": {"simple": 2}}),
        )
        assert merged.uaw == ComplexityCount(simple=1, average=2, complex=7)
        assert merged.uucw == ComplexityCount(simple=2, average=5, complex=6)

    def test_totals_ignored(self) -> None:
        merged = merge_suggestion(
            _counts(), _suggestion({"uaw": {"simple": 2, "total": 1000}})
        )
        assert merged.uaw == ComplexityCount(simple=2, average=2, complex=3)

    def test_does_not_mutate_current(self) -> None:
        current = _counts()
        merge_suggestion(current, _suggestion({"uaw": {"simple": 9}}))
        assert current == _counts()


class TestDecisions:
    def test_records_written_fields(self) -> None:
        _, decisions = merge_with_decisions(
            _counts(),
            _suggestion({"uaw": {"simple": 9}, "uucw": {"average": 1, "complex": 2}}),
        )
        assert decisions == [
            MergeDecision(field_name="uaw.simple", previous=1.0, value=9.0),
            MergeDecision(field_name="uucw.average", previous=5.0, value=1.0),
            MergeDecision(field_name="uucw.complex", previous=6.0, value=2.0),
        ]

    @pytest.mark.parametrize("suggestion", [None, AnalysisSuggestion()])
    def test_no_decisions_for_identity(self, suggestion: AnalysisSuggestion | None) -> None:
        merged, decisions = merge_with_decisions(_counts(), suggestion)
        assert merged == _counts()
        assert decisions == []
