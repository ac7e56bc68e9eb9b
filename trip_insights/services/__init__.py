"""Service package wiring configuration to the analytics core."""
from trip_insights.services.analyzer import TripAnalyzer
from trip_insights.services.clustering import ClusteringService
from trip_insights.services.observations import ObservationService
from trip_insights.services.outliers import OutlierService

__all__ = [
    "TripAnalyzer",
    "ClusteringService",
    "ObservationService",
    "OutlierService",
]
