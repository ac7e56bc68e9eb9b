"""Trip clustering and outlier detection for geolocated trip records."""
from trip_insights.core.cluster import Cluster
from trip_insights.core.observation import Observation
from trip_insights.core.outlier_report import Bounds, OutlierReport
from trip_insights.errors import ConfigurationError
from trip_insights.utils.kmeans import KMeansClusterer
from trip_insights.utils.outliers import OutlierDetector

__all__ = [
    "Bounds",
    "Cluster",
    "ConfigurationError",
    "KMeansClusterer",
    "Observation",
    "OutlierDetector",
    "OutlierReport",
]
