"""Actor / use-case complexity counts and AI-suggested partial counts."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ucp_estimator.models.enums import ComplexityLevel, CountCategory


class ComplexityCount(BaseModel):
    """Counts of simple, average and complex items.

    Counts are floats and are never rounded. Negative values are accepted
    and computed through.
    """

    model_config = ConfigDict(validate_assignment=True)

    simple: float = Field(default=0.0, allow_inf_nan=False)
    average: float = Field(default=0.0, allow_inf_nan=False)
    complex: float = Field(default=0.0, allow_inf_nan=False)

    def get(self, level: ComplexityLevel) -> float:
        return float(getattr(self, level.value))


class UcpCounts(BaseModel):
    """The UAW (actors) and UUCW (use cases) counts together."""

    uaw: ComplexityCount = Field(default_factory=ComplexityCount)
    uucw: ComplexityCount = Field(default_factory=ComplexityCount)

    def category(self, category: CountCategory) -> ComplexityCount:
        return self.uaw if category is CountCategory.UAW else self.uucw


class PartialComplexityCount(BaseModel):
    """A suggested ComplexityCount where every field may be missing.

    ``None`` means "not provided"; unknown keys such as ``total`` are dropped.
    """

    model_config = ConfigDict(extra="ignore")

    simple: float | None = Field(default=None, allow_inf_nan=False)
    average: float | None = Field(default=None, allow_inf_nan=False)
    complex: float | None = Field(default=None, allow_inf_nan=False)

    def provided(self) -> dict[str, float]:
        """Return only the sub-fields that carry a value."""
        return {
            level.value: value
            for level in ComplexityLevel
            if (value := getattr(self, level.value)) is not None
        }


class AnalysisSuggestion(BaseModel):
    """Counts suggested by the analysis provider, possibly partial."""

    model_config = ConfigDict(extra="ignore")

    uaw: PartialComplexityCount | None = None
    uucw: PartialComplexityCount | None = None

    def category(self, category: CountCategory) -> PartialComplexityCount | None:
        return self.uaw if category is CountCategory.UAW else self.uucw

    def is_empty(self) -> bool:
        return not any(
            part is not None and part.provided()
            for part in (self.uaw, self.uucw)
        )
