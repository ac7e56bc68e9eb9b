"""Data Generator - generates synthetic taxi trips around a city center."""
from __future__ import annotations

import numpy as np
import pandas as pd

from trip_insights.utils.geo import KM_PER_MILE, haversine_miles


# (share of trips, median straight-line miles)
TRIP_PROFILES = [
    (0.5, 1.0),
    (0.35, 3.0),
    (0.15, 8.0),
]
ROAD_FACTOR = 1.3  # Road distance over straight-line distance
MILES_PER_DEGREE_LAT = 69.0


class TripDataGenerator:
    """Generates trip records with short, medium and long distance modes."""

    def __init__(self, center: tuple[float, float] = (40.758896, -73.985130),
                 anomaly_rate: float = 0.03,
                 start: str = "2024-01-01") -> None:
        self.center = center
        self.anomaly_rate = anomaly_rate
        self.start = pd.Timestamp(start)

    def generate(self, n: int = 1000, seed: int = 42) -> pd.DataFrame:
        """
        Generate n random trips.

        A share of ``anomaly_rate`` trips get a duration several times longer
        than their distance suggests, so duration outliers exist.

        Args:
            n: Number of trips to generate
            seed: Random seed for reproducibility

        Returns:
            DataFrame with id, pickup/dropoff datetime and coordinates,
            passenger_count, trip_distance (miles), fare_amount, tip_amount
        """
        rng = np.random.default_rng(seed)
        center_lat, center_lon = self.center

        shares = np.array([p[0] for p in TRIP_PROFILES])
        medians = np.array([p[1] for p in TRIP_PROFILES])
        profile = rng.choice(len(TRIP_PROFILES), size=n, p=shares / shares.sum())
        straight_miles = medians[profile] * rng.lognormal(0.0, 0.35, size=n)

        pickup_lat = center_lat + rng.normal(0.0, 0.02, size=n)
        pickup_lon = center_lon + rng.normal(0.0, 0.02, size=n)
        bearing = rng.uniform(0.0, 2 * np.pi, size=n)
        dlat = straight_miles * np.cos(bearing) / MILES_PER_DEGREE_LAT
        dlon = straight_miles * np.sin(bearing) / (MILES_PER_DEGREE_LAT * np.cos(np.radians(pickup_lat)))
        dropoff_lat = pickup_lat + dlat
        dropoff_lon = pickup_lon + dlon

        trip_distance = np.array([
            haversine_miles(a, b, c, d) * ROAD_FACTOR
            for a, b, c, d in zip(pickup_lat, pickup_lon, dropoff_lat, dropoff_lon)
        ])

        speed_kmh = np.clip(rng.normal(18.0, 5.0, size=n), 5.0, 60.0)
        minutes = trip_distance * KM_PER_MILE / speed_kmh * 60
        anomalous = rng.random(size=n) < self.anomaly_rate
        minutes[anomalous] *= rng.uniform(4.0, 10.0, size=int(anomalous.sum()))

        pickup = self.start + pd.to_timedelta(rng.uniform(0, 7 * 24 * 3600, size=n), unit="s")
        dropoff = pickup + pd.to_timedelta(minutes * 60, unit="s")

        fare = np.round(3.0 + 2.5 * trip_distance + 0.35 * minutes, 2)
        tip = np.round(fare * rng.uniform(0.0, 0.25, size=n), 2)

        return pd.DataFrame({
            "id": np.arange(1, n + 1),
            "pickup_datetime": pickup,
            "dropoff_datetime": dropoff,
            "pickup_latitude": pickup_lat,
            "pickup_longitude": pickup_lon,
            "dropoff_latitude": dropoff_lat,
            "dropoff_longitude": dropoff_lon,
            "passenger_count": rng.integers(1, 5, size=n),
            "trip_distance": np.round(trip_distance, 2),
            "fare_amount": fare,
            "tip_amount": tip,
        })
