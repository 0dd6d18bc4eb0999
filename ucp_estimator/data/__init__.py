"""Factor catalog data for the UCP estimator."""

from ucp_estimator.data.factor_catalog import (
    DEFAULT_RATING,
    ENVIRONMENTAL_FACTORS,
    TECHNICAL_FACTORS,
    default_ef_factors,
    default_tcf_factors,
)

__all__ = [
    "DEFAULT_RATING",
    "ENVIRONMENTAL_FACTORS",
    "TECHNICAL_FACTORS",
    "default_ef_factors",
    "default_tcf_factors",
]
