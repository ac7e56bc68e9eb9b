"""
Configuration settings for the Trip Insights analytics engine.

This module centralizes all configuration parameters for trip clustering,
outlier detection, synthetic data generation, and progress output.
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _optional_int(value: str | None) -> int | None:
    if value is None or value.strip() == "":
        return None
    return int(value)


class Config:
    """Central configuration for the trip analytics system."""

    # =========================================================================
    # Clustering
    # =========================================================================
    NUM_CLUSTERS: int = int(os.getenv("NUM_CLUSTERS", "3"))
    MIN_CLUSTERS: int = 2
    MAX_CLUSTERS: int = 10
    MAX_ITERATIONS: int = int(os.getenv("KMEANS_MAX_ITERATIONS", "100"))
    TOLERANCE: float = float(os.getenv("KMEANS_TOLERANCE", "0.001"))

    # None draws the first seed centroid from fresh OS entropy on every run
    RANDOM_SEED: int | None = _optional_int(os.getenv("RANDOM_SEED"))

    CLUSTER_FEATURE: str = "trip_distance"
    CLUSTER_SAMPLE_LIMIT: int = int(os.getenv("CLUSTER_SAMPLE_LIMIT", "10000"))

    # Upper bounds in miles, checked in order; anything above is "Long Distance"
    DISTANCE_LABEL_THRESHOLDS: list[tuple[float, str]] = [
        (2.0, "Short Distance"),
        (5.0, "Medium Distance"),
    ]
    LONG_DISTANCE_LABEL: str = "Long Distance"

    # =========================================================================
    # Outlier Detection
    # =========================================================================
    IQR_MULTIPLIER: float = float(os.getenv("IQR_MULTIPLIER", "1.5"))
    SORT_PIVOT: str = os.getenv("SORT_PIVOT", "random")  # "random" or "last"
    OUTLIER_METRIC: str = "trip_duration_minutes"
    OUTLIER_SAMPLE_LIMIT: int = 100  # Max outlier records returned in a report

    # =========================================================================
    # Synthetic Trip Generation
    # =========================================================================
    NUM_TRIPS: int = int(os.getenv("NUM_TRIPS", "1000"))
    CITY_CENTER: tuple[float, float] = (40.758896, -73.985130)
    ANOMALY_RATE: float = 0.03

    # =========================================================================
    # Output
    # =========================================================================
    VERBOSE: bool = os.getenv("VERBOSE", "true").lower() == "true"
