"""Formatting helpers for UCP estimate output.

Each derived quantity has a fixed display precision: two decimals for
points and multipliers, whole hours, and one decimal for person-days and
person-months.
"""

from __future__ import annotations


def format_points(value: float) -> str:
    """Format a points figure or multiplier with two decimals (e.g. '34.51')."""
    return f"{value:.2f}"


def format_hours(hours: float) -> str:
    """Format effort hours with no decimals (e.g. '690 hours')."""
    return f"{hours:.0f} hours"


def format_days(days: float) -> str:
    """Format person-days with one decimal (e.g. '86.3 days')."""
    return f"{days:.1f} days"


def format_months(months: float) -> str:
    return f"{months:.1f} months"
