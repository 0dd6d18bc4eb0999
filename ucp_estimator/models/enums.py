"""Enums for the UCP estimator domain models."""

from enum import StrEnum


class CountCategory(StrEnum):
    """The two complexity-count categories that make up UUCP."""

    UAW = "uaw"
    UUCW = "uucw"


class ComplexityLevel(StrEnum):
    """Complexity class of an actor or use case."""

    SIMPLE = "simple"
    AVERAGE = "average"
    COMPLEX = "complex"


class FactorSetKind(StrEnum):
    """The two weighted factor tables."""

    TCF = "tcf"
    EF = "ef"
