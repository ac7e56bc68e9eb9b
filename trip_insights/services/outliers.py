"""Outlier Service - flags anomalous trips by an IQR range on one metric."""
from __future__ import annotations

from typing import Any, Iterable

from trip_insights.core.observation import Observation
from trip_insights.core.outlier_report import OutlierReport
from trip_insights.utils.outliers import OutlierDetector


class OutlierService:
    """Service for detecting outlier values and the trips they belong to."""

    def __init__(self, config):
        self.config = config
        self.detector = OutlierDetector(
            multiplier=config.IQR_MULTIPLIER,
            pivot=config.SORT_PIVOT,
            random_state=getattr(config, 'RANDOM_SEED', None)
        )

    @staticmethod
    def get_metric_value(record: Any, metric: str) -> float:
        """Read a metric from an Observation or a trip mapping."""
        if isinstance(record, Observation):
            if metric == "feature":
                return record.feature
            return record.aux_metrics[metric]
        return float(record[metric])

    def detect(self, values: Iterable[float]) -> OutlierReport:
        """
        Detect outliers in a flat list of values.

        Returns:
            OutlierReport with outlier values in input order
        """
        values = list(values)
        result = self.detector.detect_outliers(values)
        return OutlierReport(
            total_count=len(values),
            lower_bound=result['lower'],
            upper_bound=result['upper'],
            outlier_values=result['outliers']
        )

    def detect_trip_outliers(self, records: Iterable[Any], metric: str | None = None) -> OutlierReport:
        """
        Detect trips whose metric lies outside the IQR range.

        Args:
            records: Trip dicts or Observation objects
            metric: Name of the metric to test (defaults to config OUTLIER_METRIC)

        Returns:
            OutlierReport whose outlier_records holds at most
            OUTLIER_SAMPLE_LIMIT of the offending trips, in input order
        """
        metric = metric or self.config.OUTLIER_METRIC
        records = list(records)
        values = [self.get_metric_value(record, metric) for record in records]

        report = self.detect(values)
        limit = self.config.OUTLIER_SAMPLE_LIMIT

        for record, value in zip(records, values):
            if len(report.outlier_records) >= limit:
                break
            if value < report.lower_bound or value > report.upper_bound:
                row = record.to_dict() if isinstance(record, Observation) else dict(record)
                report.outlier_records.append(row)

        return report
