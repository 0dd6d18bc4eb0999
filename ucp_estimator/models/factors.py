"""Weighted factor tables (TCF and EF) for the UCP estimator."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ucp_estimator.exceptions import UnknownFactorError


class FactorRow(BaseModel):
    """One weighted rating entry.

    ``id``, ``name`` and ``weight`` are fixed at construction; only ``value``
    changes afterwards. Ratings are conventionally 0-5 in 0.5 steps, but any
    finite number is accepted here.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(frozen=True)
    name: str = Field(frozen=True)
    weight: float = Field(frozen=True, allow_inf_nan=False)
    value: float = Field(default=3.0, allow_inf_nan=False)

    @property
    def weighted_value(self) -> float:
        return self.weight * self.value


class FactorSet(BaseModel):
    """Ordered collection of factor rows with unique ids.

    Row order is display order and carries no arithmetic meaning.
    """

    factors: list[FactorRow]

    @model_validator(mode="after")
    def ids_must_be_unique(self) -> FactorSet:
        ids = [row.id for row in self.factors]
        if len(ids) != len(set(ids)):
            msg = f"Factor ids must be unique, got {ids}"
            raise ValueError(msg)
        return self

    def factor_total(self) -> float:
        """Sum of weight x value over all rows (TFactor / EFactor)."""
        return sum(row.weight * row.value for row in self.factors)

    def get(self, factor_id: int) -> FactorRow:
        for row in self.factors:
            if row.id == factor_id:
                return row
        msg = f"No factor with id {factor_id}"
        raise UnknownFactorError(msg)

    def set_value(self, factor_id: int, value: float) -> None:
        self.get(factor_id).value = value
