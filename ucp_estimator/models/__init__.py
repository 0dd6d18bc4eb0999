"""Domain models for the UCP estimator."""

from ucp_estimator.models.counts import (
    AnalysisSuggestion,
    ComplexityCount,
    PartialComplexityCount,
    UcpCounts,
)
from ucp_estimator.models.enums import ComplexityLevel, CountCategory, FactorSetKind
from ucp_estimator.models.estimate import (
    Advisory,
    EstimateMetadata,
    EstimationInput,
    FactorContribution,
    UcpEstimate,
)
from ucp_estimator.models.factors import FactorRow, FactorSet

__all__ = [
    "Advisory",
    "AnalysisSuggestion",
    "ComplexityCount",
    "ComplexityLevel",
    "CountCategory",
    "EstimateMetadata",
    "EstimationInput",
    "FactorContribution",
    "FactorRow",
    "FactorSet",
    "FactorSetKind",
    "PartialComplexityCount",
    "UcpCounts",
    "UcpEstimate",
]
