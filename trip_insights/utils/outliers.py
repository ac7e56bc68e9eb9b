"""Outlier Detector - interquartile-range fences over a flat list of values."""
from __future__ import annotations

import math
from typing import Iterable

import numpy as np

from trip_insights.core.outlier_report import Bounds
from trip_insights.errors import ConfigurationError
from trip_insights.utils.sorting import PIVOT_STRATEGIES, quicksort


class OutlierDetector:
    """Classifies values as inliers or outliers using nearest-rank quartiles."""

    def __init__(
        self,
        multiplier: float = 1.5,
        pivot: str = "random",
        random_state: int | np.random.Generator | None = None,
    ) -> None:
        if not isinstance(multiplier, (int, float)) or not math.isfinite(multiplier) or multiplier < 0:
            raise ConfigurationError(f"multiplier must be a finite non-negative number, got {multiplier!r}")
        if pivot not in PIVOT_STRATEGIES:
            raise ConfigurationError(
                f"Unsupported pivot strategy: {pivot!r} (expected one of {PIVOT_STRATEGIES})"
            )
        self.multiplier = float(multiplier)
        self.pivot = pivot
        self.random_state = random_state

    @staticmethod
    def quartiles(sorted_values: list[float]) -> tuple[float, float]:
        """Q1 and Q3 by index truncation: sorted[floor(n/4)], sorted[floor(3n/4)]."""
        n = len(sorted_values)
        return sorted_values[math.floor(n * 0.25)], sorted_values[math.floor(n * 0.75)]

    def compute_bounds(self, values: Iterable[float]) -> Bounds:
        """
        Compute the IQR fences for a set of values.

        Args:
            values: Numbers to analyse (not modified)

        Returns:
            Bounds with lower = Q1 - m*IQR and upper = Q3 + m*IQR;
            all zeros for empty input
        """
        sorted_values = quicksort(values, pivot=self.pivot, random_state=self.random_state)
        if not sorted_values:
            return Bounds(lower=0.0, upper=0.0)

        q1, q3 = self.quartiles(sorted_values)
        iqr = q3 - q1
        return Bounds(
            lower=q1 - self.multiplier * iqr,
            upper=q3 + self.multiplier * iqr,
            q1=q1,
            q3=q3,
        )

    def detect_outliers(self, values: Iterable[float]) -> dict:
        """
        Detect outliers using the IQR method.

        Args:
            values: Numbers to classify (not modified)

        Returns:
            Dict with 'outliers' (values outside the fences, in input order),
            'lower' and 'upper'
        """
        values = list(values)
        if not values:
            return {'outliers': [], 'lower': 0.0, 'upper': 0.0}

        bounds = self.compute_bounds(values)
        outliers = [v for v in values if bounds.is_outlier(v)]

        return {'outliers': outliers, 'lower': bounds.lower, 'upper': bounds.upper}
