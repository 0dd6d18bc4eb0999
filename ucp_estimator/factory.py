"""Factory functions for creating pre-configured calculator state."""

from __future__ import annotations

from ucp_estimator.calculator import UcpCalculator
from ucp_estimator.data.factor_catalog import default_ef_factors, default_tcf_factors
from ucp_estimator.models.counts import UcpCounts
from ucp_estimator.models.estimate import EstimationInput

DEFAULT_PRODUCTIVITY_FACTOR = 20.0


def create_default_input() -> EstimationInput:
    """Create a fresh EstimationInput with the standard factor catalog.

    All counts start at 0, every factor rating at 3 and the productivity
    factor at 20 hours per UCP.
    """
    return EstimationInput(
        ucp=UcpCounts(),
        tcf=default_tcf_factors(),
        ef=default_ef_factors(),
        productivity_factor=DEFAULT_PRODUCTIVITY_FACTOR,
    )


def create_default_calculator() -> UcpCalculator:
    """Create a UcpCalculator wired up with the default input.

    Example::

        from ucp_estimator import create_default_calculator

        calculator = create_default_calculator()
        calculator.set_count("uucw", "average", 4)
        estimate = calculator.estimate()
    """
    return UcpCalculator(create_default_input())
