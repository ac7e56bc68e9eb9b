"""Outlier models - IQR fences and the report built from them."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Bounds:
    """Inclusive normal range ``[lower, upper]`` derived from the quartiles."""

    lower: float
    upper: float
    q1: float = 0.0
    q3: float = 0.0

    @property
    def iqr(self) -> float:
        return self.q3 - self.q1

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper

    def is_outlier(self, value: float) -> bool:
        return value < self.lower or value > self.upper


@dataclass
class OutlierReport:
    """Summary of one outlier-detection call."""

    total_count: int
    lower_bound: float
    upper_bound: float
    outlier_values: list[float] = field(default_factory=list)
    outlier_records: list[Any] = field(default_factory=list)
    outlier_count: int | None = None

    def __post_init__(self) -> None:
        # The record list may be truncated, so the count comes from the values
        if self.outlier_count is None:
            self.outlier_count = len(self.outlier_values)

    @property
    def inlier_count(self) -> int:
        return self.total_count - self.outlier_count

    @property
    def outlier_percentage(self) -> float:
        if self.total_count == 0:
            return 0.0
        return (self.outlier_count / self.total_count) * 100

    def to_dict(self) -> dict:
        return {
            'outlier_count': self.outlier_count,
            'total_count': self.total_count,
            'outlier_percentage': self.outlier_percentage,
            'lower_bound': self.lower_bound,
            'upper_bound': self.upper_bound,
            'outlier_values': list(self.outlier_values),
            'outlier_records': list(self.outlier_records),
        }

    def __repr__(self) -> str:
        return (f"OutlierReport({self.outlier_count}/{self.total_count} outliers, "
                f"range=[{self.lower_bound:g}, {self.upper_bound:g}])")
