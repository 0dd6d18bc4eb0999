"""Core Use Case Points estimation engine.

The UCP method turns complexity counts and factor ratings into an effort
figure in five steps:

1. **UUCP**: weight actor counts (1/2/3) and use-case counts (5/10/15) and
   sum them into unadjusted use case points.
2. **TCF**: scale the technical factor total, ``0.6 + 0.01 * TFactor``.
3. **EF**: scale the environmental factor total, ``1.4 - 0.03 * EFactor``.
4. **UCP**: ``UUCP * TCF * EF``.
5. **Effort**: ``UCP * productivity factor`` hours, then person-days (8 h)
   and person-months (22 days) for display.

The module-level functions are pure. ``UcpEngine.estimate`` recomputes every
quantity from the input it is handed and never caches results.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ucp_estimator.models.enums import ComplexityLevel
from ucp_estimator.models.estimate import (
    Advisory,
    EstimateMetadata,
    FactorContribution,
    UcpEstimate,
)

if TYPE_CHECKING:
    from ucp_estimator.models.counts import ComplexityCount
    from ucp_estimator.models.estimate import EstimationInput
    from ucp_estimator.models.factors import FactorSet

UAW_WEIGHTS: dict[str, float] = {"simple": 1.0, "average": 2.0, "complex": 3.0}
UUCW_WEIGHTS: dict[str, float] = {"simple": 5.0, "average": 10.0, "complex": 15.0}

TCF_BASE = 0.6
TCF_SLOPE = 0.01
EF_BASE = 1.4
EF_SLOPE = -0.03

HOURS_PER_PERSON_DAY = 8.0
DAYS_PER_PERSON_MONTH = 22.0

# Industry range for hours per UCP; advisory only
PRODUCTIVITY_FACTOR_RANGE: tuple[float, float] = (15.0, 30.0)
RATING_RANGE: tuple[float, float] = (0.0, 5.0)

ENGINE_VERSION = "0.1.0"


def _weighted_count(count: ComplexityCount, weights: dict[str, float]) -> float:
    return (
        count.simple * weights["simple"]
        + count.average * weights["average"]
        + count.complex * weights["complex"]
    )


def compute_uaw(uaw: ComplexityCount) -> float:
    """Unadjusted actor weight."""
    return _weighted_count(uaw, UAW_WEIGHTS)


def compute_uucw(uucw: ComplexityCount) -> float:
    """Unadjusted use case weight."""
    return _weighted_count(uucw, UUCW_WEIGHTS)


def compute_uucp(uaw: ComplexityCount, uucw: ComplexityCount) -> float:
    """Unadjusted use case points: UAW + UUCW."""
    return compute_uaw(uaw) + compute_uucw(uucw)


def compute_tcf(tcf: FactorSet) -> float:
    """Technical complexity factor: ``0.6 + 0.01 * TFactor``."""
    return TCF_BASE + TCF_SLOPE * tcf.factor_total()


def compute_ef(ef: FactorSet) -> float:
    """Environmental factor: ``1.4 + (-0.03) * EFactor``.

    Rows with negative weights (Part-Time Staff, Difficult Programming
    Language) raise EF as their rating goes up.
    """
    return EF_BASE + EF_SLOPE * ef.factor_total()


def compute_ucp(uucp: float, tcf: float, ef: float) -> float:
    return uucp * tcf * ef


def compute_effort(ucp: float, productivity_factor: float) -> float:
    """Effort in hours: UCP times hours per point."""
    return ucp * productivity_factor


def to_person_days(effort_hours: float) -> float:
    return effort_hours / HOURS_PER_PERSON_DAY


def to_person_months(person_days: float) -> float:
    return person_days / DAYS_PER_PERSON_MONTH


class UcpEngine:
    """Converts an EstimationInput into a UcpEstimate.

    Example::

        from ucp_estimator import UcpEngine, create_default_input

        estimate = UcpEngine().estimate(create_default_input())
    """

    def estimate(self, estimation_input: EstimationInput) -> UcpEstimate:
        """Compute every derived quantity from the current input.

        Out-of-convention values (negative counts, ratings outside 0-5,
        unusual productivity factors) are computed through and reported as
        advisories.
        """
        counts = estimation_input.ucp

        # 1. Unadjusted points
        uaw_total = compute_uaw(counts.uaw)
        uucw_total = compute_uucw(counts.uucw)
        uucp = compute_uucp(counts.uaw, counts.uucw)

        # 2-3. Adjustment factors
        t_factor = estimation_input.tcf.factor_total()
        tcf = compute_tcf(estimation_input.tcf)
        e_factor = estimation_input.ef.factor_total()
        ef = compute_ef(estimation_input.ef)

        # 4-5. Points and effort
        ucp = compute_ucp(uucp, tcf, ef)
        effort_hours = compute_effort(ucp, estimation_input.productivity_factor)
        person_days = to_person_days(effort_hours)

        return UcpEstimate(
            uaw_total=uaw_total,
            uucw_total=uucw_total,
            uucp=uucp,
            t_factor=t_factor,
            tcf=tcf,
            e_factor=e_factor,
            ef=ef,
            ucp=ucp,
            productivity_factor=estimation_input.productivity_factor,
            effort_hours=effort_hours,
            person_days=person_days,
            person_months=to_person_months(person_days),
            tcf_breakdown=self._breakdown(estimation_input.tcf),
            ef_breakdown=self._breakdown(estimation_input.ef),
            advisories=self._collect_advisories(estimation_input),
            metadata=EstimateMetadata(
                engine_version=ENGINE_VERSION,
                hours_per_person_day=HOURS_PER_PERSON_DAY,
                days_per_person_month=DAYS_PER_PERSON_MONTH,
            ),
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _breakdown(factor_set: FactorSet) -> list[FactorContribution]:
        return [
            FactorContribution(
                id=row.id,
                name=row.name,
                weight=row.weight,
                value=row.value,
                weighted_value=row.weighted_value,
            )
            for row in factor_set.factors
        ]

    @staticmethod
    def _collect_advisories(estimation_input: EstimationInput) -> list[Advisory]:
        advisories: list[Advisory] = []

        low, high = PRODUCTIVITY_FACTOR_RANGE
        pf = estimation_input.productivity_factor
        if not (low <= pf <= high):
            advisories.append(
                Advisory(
                    parameter="productivity_factor",
                    value=f"{pf:g}",
                    reasoning=(
                        f"Outside the typical industry range of "
                        f"{low:g}-{high:g} hours per UCP"
                    ),
                )
            )

        rating_low, rating_high = RATING_RANGE
        for prefix, factor_set in (
            ("tcf", estimation_input.tcf),
            ("ef", estimation_input.ef),
        ):
            for row in factor_set.factors:
                if not (rating_low <= row.value <= rating_high):
                    advisories.append(
                        Advisory(
                            parameter=f"{prefix}.{row.id}",
                            value=f"{row.value:g}",
                            reasoning=(
                                f"Rating for '{row.name}' is outside "
                                f"{rating_low:g}-{rating_high:g}"
                            ),
                        )
                    )

        for category, count in (
            ("uaw", estimation_input.ucp.uaw),
            ("uucw", estimation_input.ucp.uucw),
        ):
            for level in ComplexityLevel:
                value = count.get(level)
                if value < 0:
                    advisories.append(
                        Advisory(
                            parameter=f"{category}.{level.value}",
                            value=f"{value:g}",
                            reasoning="Negative count; computed as entered",
                        )
                    )

        return advisories
