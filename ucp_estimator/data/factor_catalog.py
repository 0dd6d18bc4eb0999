"""Standard UCP factor catalog.

Weights follow the published Use Case Points tables (Karner, 1993). Every
rating starts at the midpoint value of 3. Two environmental factors carry
negative weights, so a high rating on them raises EF.
"""

from __future__ import annotations

from ucp_estimator.models.factors import FactorRow, FactorSet

DEFAULT_RATING = 3.0

# (id, name, weight)
TECHNICAL_FACTORS: list[tuple[int, str, float]] = [
    (1, "Distributed System", 2.0),
    (2, "Response Time/Performance", 1.0),
    (3, "End-User Efficiency", 1.0),
    (4, "Complex Processing", 1.0),
    (5, "Reusability", 1.0),
    (6, "Easy to Install", 0.5),
    (7, "Easy to Use", 0.5),
    (8, "Portability", 2.0),
    (9, "Easy to Change", 1.0),
    (10, "Concurrency", 1.0),
    (11, "Special Security Features", 1.0),
    (12, "Direct Access for Third Parties", 1.0),
    (13, "Special User Training Facilities", 1.0),
]

ENVIRONMENTAL_FACTORS: list[tuple[int, str, float]] = [
    (1, "Familiarity with Project", 1.5),
    (2, "Application Experience", 0.5),
    (3, "Object-Oriented Experience", 1.0),
    (4, "Lead Analyst Capability", 0.5),
    (5, "Motivation", 1.0),
    (6, "Stable Requirements", 2.0),
    (7, "Part-Time Staff", -1.0),
    (8, "Difficult Programming Language", -1.0),
]


def _build_factor_set(catalog: list[tuple[int, str, float]]) -> FactorSet:
    return FactorSet(
        factors=[
            FactorRow(id=factor_id, name=name, weight=weight, value=DEFAULT_RATING)
            for factor_id, name, weight in catalog
        ]
    )


def default_tcf_factors() -> FactorSet:
    """Return a fresh 13-row technical factor table at default ratings."""
    return _build_factor_set(TECHNICAL_FACTORS)


def default_ef_factors() -> FactorSet:
    """Return a fresh 8-row environmental factor table at default ratings."""
    return _build_factor_set(ENVIRONMENTAL_FACTORS)
