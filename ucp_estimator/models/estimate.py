"""Estimation input and output models for the UCP estimator."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ucp_estimator.models.counts import UcpCounts
from ucp_estimator.models.factors import FactorSet


class EstimationInput(BaseModel):
    """Root of the calculator state: counts, both factor tables and hours/UCP."""

    model_config = ConfigDict(validate_assignment=True)

    ucp: UcpCounts = Field(default_factory=UcpCounts)
    tcf: FactorSet
    ef: FactorSet
    productivity_factor: float = Field(default=20.0, allow_inf_nan=False)


class FactorContribution(BaseModel):
    """One row of a factor table with its weighted contribution."""

    id: int
    name: str
    weight: float
    value: float
    weighted_value: float


class Advisory(BaseModel):
    """A non-blocking note about an input outside its conventional range."""

    parameter: str
    value: str
    reasoning: str


class EstimateMetadata(BaseModel):
    """Metadata about the estimation run."""

    engine_version: str
    estimation_method: str = "use_case_points"
    hours_per_person_day: float = 8.0
    days_per_person_month: float = 22.0


class UcpEstimate(BaseModel):
    """Every derived quantity of a UCP estimate, computed from one input.

    Values are unrounded; use ``to_summary_dict`` for display strings.
    """

    uaw_total: float
    uucw_total: float
    uucp: float
    t_factor: float
    tcf: float
    e_factor: float
    ef: float
    ucp: float
    productivity_factor: float
    effort_hours: float
    person_days: float
    person_months: float
    tcf_breakdown: list[FactorContribution]
    ef_breakdown: list[FactorContribution]
    advisories: list[Advisory] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=datetime.now)
    metadata: EstimateMetadata

    def to_summary_dict(self) -> dict[str, Any]:
        """Produce a flat dict of display strings at the recommended precision."""
        from ucp_estimator.formatting import (
            format_days,
            format_hours,
            format_months,
            format_points,
        )

        return {
            "uucp_formatted": format_points(self.uucp),
            "tcf_formatted": format_points(self.tcf),
            "ef_formatted": format_points(self.ef),
            "ucp_formatted": format_points(self.ucp),
            "effort_hours_formatted": format_hours(self.effort_hours),
            "person_days_formatted": format_days(self.person_days),
            "person_months_formatted": format_months(self.person_months),
            "t_factor_formatted": format_points(self.t_factor),
            "e_factor_formatted": format_points(self.e_factor),
            "effort_formula": (
                f"Effort = UCP × {self.productivity_factor:g} hours/UCP"
            ),
            "num_advisories": len(self.advisories),
            "generated_at_formatted": self.generated_at.strftime("%Y-%m-%d %H:%M"),
        }
