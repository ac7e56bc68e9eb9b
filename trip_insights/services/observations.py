"""Observation Service - turns trip rows into observations for the analytics core."""
from __future__ import annotations

from typing import Any, Iterable, Mapping

import pandas as pd

from trip_insights.core.observation import Observation
from trip_insights.utils.geo import KM_PER_MILE, haversine_miles


DEFAULT_METRICS = [
    "trip_duration_minutes",
    "trip_speed_kmh",
    "fare_amount",
    "fare_per_km",
]
COORDINATE_COLUMNS = (
    "pickup_latitude", "pickup_longitude", "dropoff_latitude", "dropoff_longitude"
)


class ObservationService:
    """Service for deriving trip features and building Observation objects."""

    def __init__(self, config):
        self.config = config

    @staticmethod
    def _present(row: Mapping[str, Any], key: str) -> bool:
        return key in row and row[key] is not None and not pd.isna(row[key])

    def derive_features(self, trip: Mapping[str, Any]) -> dict:
        """
        Add derived metrics to a trip row.

        Columns already present are kept as-is. Missing ones are derived:
        trip_duration_minutes from the pickup/dropoff datetimes, trip_distance
        (miles) from the coordinates, trip_speed_kmh and fare_per_km from
        distance, duration and fare.

        Args:
            trip: Mapping of column name to value

        Returns:
            New dict with the derived columns added
        """
        row = dict(trip)

        if not self._present(row, "trip_duration_minutes") and \
                self._present(row, "pickup_datetime") and self._present(row, "dropoff_datetime"):
            elapsed = pd.Timestamp(row["dropoff_datetime"]) - pd.Timestamp(row["pickup_datetime"])
            row["trip_duration_minutes"] = elapsed.total_seconds() / 60

        if not self._present(row, "trip_distance") and \
                all(self._present(row, col) for col in COORDINATE_COLUMNS):
            row["trip_distance"] = haversine_miles(*(float(row[col]) for col in COORDINATE_COLUMNS))

        has_distance = self._present(row, "trip_distance")
        distance_km = float(row["trip_distance"]) * KM_PER_MILE if has_distance else None

        if not self._present(row, "trip_speed_kmh") and has_distance and \
                self._present(row, "trip_duration_minutes"):
            minutes = float(row["trip_duration_minutes"])
            row["trip_speed_kmh"] = (distance_km / minutes) * 60 if minutes > 0 else 0.0

        if not self._present(row, "fare_per_km") and has_distance and self._present(row, "fare_amount"):
            row["fare_per_km"] = float(row["fare_amount"]) / distance_km if distance_km > 0 else 0.0

        return row

    def to_records(self, trips: pd.DataFrame | Iterable[Mapping[str, Any]]) -> list[dict]:
        """Return derived trip rows from a DataFrame or an iterable of mappings."""
        if isinstance(trips, pd.DataFrame):
            trips = trips.to_dict(orient="records")
        return [self.derive_features(trip) for trip in trips]

    def from_records(self, records: Iterable[Mapping[str, Any]], feature: str | None = None,
                     metrics: list[str] | None = None) -> list[Observation]:
        """
        Build observations from trip rows.

        Args:
            records: Trip rows (derived columns are added when missing)
            feature: Column used as the clustering feature
            metrics: Columns carried as auxiliary metrics; those missing on a
                row are skipped for that row

        Returns:
            List of Observation objects in input order
        """
        feature = feature or self.config.CLUSTER_FEATURE
        if metrics is None:
            metrics = [m for m in DEFAULT_METRICS if m != feature]

        observations = []
        for index, trip in enumerate(records):
            row = self.derive_features(trip)
            if not self._present(row, feature):
                raise KeyError(f"Trip {row.get('id', index)} has no '{feature}' value")

            observations.append(Observation(
                id=row.get("id", index),
                feature=row[feature],
                aux_metrics={m: row[m] for m in metrics if self._present(row, m)},
            ))

        return observations

    def from_dataframe(self, df: pd.DataFrame, feature: str | None = None,
                       metrics: list[str] | None = None) -> list[Observation]:
        """Build observations from a trips DataFrame."""
        return self.from_records(df.to_dict(orient="records"), feature=feature, metrics=metrics)
