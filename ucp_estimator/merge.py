"""Overlay AI-suggested counts onto the current UAW/UUCW counts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ucp_estimator.models.enums import CountCategory

if TYPE_CHECKING:
    from ucp_estimator.models.counts import AnalysisSuggestion, UcpCounts


@dataclass(frozen=True)
class MergeDecision:
    """Record of a single count overwritten by a suggestion."""

    field_name: str
    previous: float
    value: float


def merge_suggestion(
    current: UcpCounts,
    suggestion: AnalysisSuggestion | None,
) -> UcpCounts:
    """Return new counts with the suggestion's provided fields applied.

    Field-level, per category: a sub-field present in the suggestion
    overwrites the current one, absent sub-fields keep their value, and a
    category missing from the suggestion is left untouched. ``None`` or an
    empty suggestion returns counts equal to ``current``.
    """
    merged, _ = merge_with_decisions(current, suggestion)
    return merged


def merge_with_decisions(
    current: UcpCounts,
    suggestion: AnalysisSuggestion | None,
) -> tuple[UcpCounts, list[MergeDecision]]:
    """Like ``merge_suggestion`` but also report which fields were written."""
    decisions: list[MergeDecision] = []
    merged = current.model_copy(deep=True)
    if suggestion is None:
        return merged, decisions

    for category in CountCategory:
        partial = suggestion.category(category)
        if partial is None:
            continue
        provided = partial.provided()
        if not provided:
            continue
        target = current.category(category)
        updated = target.model_copy(update=provided)
        setattr(merged, category.value, updated)
        for level, value in provided.items():
            decisions.append(
                MergeDecision(
                    field_name=f"{category.value}.{level}",
                    previous=getattr(target, level),
                    value=value,
                )
            )

    return merged, decisions
