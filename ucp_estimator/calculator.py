"""Single-session calculator that owns the estimation state.

All mutation goes through the named update operations below; reads always
recompute the estimate from the current state.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ucp_estimator.engine import UcpEngine
from ucp_estimator.merge import merge_with_decisions
from ucp_estimator.models.enums import ComplexityLevel, CountCategory, FactorSetKind

if TYPE_CHECKING:
    from ucp_estimator.merge import MergeDecision
    from ucp_estimator.models.counts import AnalysisSuggestion
    from ucp_estimator.models.estimate import EstimationInput, UcpEstimate
    from ucp_estimator.models.factors import FactorSet

logger = logging.getLogger(__name__)


class UcpCalculator:
    """Owns one EstimationInput and exposes named update operations.

    Args:
        initial_input: Starting state. The calculator keeps a private deep
            copy, so later changes to the caller's object have no effect.
        engine: Engine used to compute estimates. Defaults to ``UcpEngine()``.
    """

    def __init__(
        self,
        initial_input: EstimationInput,
        engine: UcpEngine | None = None,
    ) -> None:
        self._initial = initial_input.model_copy(deep=True)
        self._input = initial_input.model_copy(deep=True)
        self._engine = engine or UcpEngine()

    @property
    def state(self) -> EstimationInput:
        """A detached copy of the current input."""
        return self._input.model_copy(deep=True)

    def estimate(self) -> UcpEstimate:
        return self._engine.estimate(self._input)

    # ------------------------------------------------------------------
    # Update operations
    # ------------------------------------------------------------------

    def set_factor_value(
        self,
        factor_set: FactorSetKind | str,
        factor_id: int,
        value: float,
    ) -> None:
        """Set the rating of one TCF or EF row.

        Raises:
            UnknownFactorError: If ``factor_id`` is not in the table.
        """
        kind = FactorSetKind(factor_set)
        self._factor_set(kind).set_value(factor_id, value)
        logger.debug("Set %s factor %d to %s", kind.value, factor_id, value)

    def set_count(
        self,
        category: CountCategory | str,
        level: ComplexityLevel | str,
        value: float,
    ) -> None:
        cat = CountCategory(category)
        lvl = ComplexityLevel(level)
        setattr(self._input.ucp.category(cat), lvl.value, value)
        logger.debug("Set %s.%s to %s", cat.value, lvl.value, value)

    def set_productivity_factor(self, value: float) -> None:
        self._input.productivity_factor = value

    def merge_suggestion(
        self, suggestion: AnalysisSuggestion | None
    ) -> list[MergeDecision]:
        """Overlay suggested counts and return the fields that were written.

        The merged counts replace the current ones in a single assignment.
        """
        merged, decisions = merge_with_decisions(self._input.ucp, suggestion)
        self._input.ucp = merged
        logger.info("Merged suggestion into counts (%d fields)", len(decisions))
        return decisions

    def reset(self) -> None:
        """Restore the state the calculator was created with."""
        self._input = self._initial.model_copy(deep=True)

    def _factor_set(self, kind: FactorSetKind) -> FactorSet:
        return self._input.tcf if kind is FactorSetKind.TCF else self._input.ef
