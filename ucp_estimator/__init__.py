"""Use Case Points estimation calculator.

Usage::

    from ucp_estimator import create_default_calculator

    calculator = create_default_calculator()
    calculator.set_count("uaw", "complex", 2)
    calculator.set_count("uucw", "average", 5)
    estimate = calculator.estimate()
    print(estimate.ucp, estimate.effort_hours)
"""

from ucp_estimator.calculator import UcpCalculator
from ucp_estimator.engine import (
    UcpEngine,
    compute_ef,
    compute_effort,
    compute_tcf,
    compute_ucp,
    compute_uucp,
)
from ucp_estimator.factory import create_default_calculator, create_default_input
from ucp_estimator.merge import MergeDecision, merge_suggestion
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
    "MergeDecision",
    "PartialComplexityCount",
    "UcpCalculator",
    "UcpCounts",
    "UcpEngine",
    "UcpEstimate",
    "compute_ef",
    "compute_effort",
    "compute_tcf",
    "compute_ucp",
    "compute_uucp",
    "create_default_calculator",
    "create_default_input",
    "merge_suggestion",
]
