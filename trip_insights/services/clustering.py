"""Clustering Service - handles trip clustering operations."""
from __future__ import annotations

import numpy as np

from trip_insights.core.cluster import Cluster
from trip_insights.errors import ConfigurationError
from trip_insights.utils.kmeans import KMeansClusterer


class ClusteringService:
    """Service for clustering trips into distance groups."""

    def __init__(self, config):
        self.config = config
        self.clusterer = None

    def validate_num_clusters(self, num_clusters):
        """Reject cluster counts outside the configured range."""
        low, high = self.config.MIN_CLUSTERS, self.config.MAX_CLUSTERS
        if isinstance(num_clusters, bool) or not isinstance(num_clusters, (int, np.integer)):
            raise ConfigurationError(f"Number of clusters must be an integer, got {num_clusters!r}")
        if not low <= num_clusters <= high:
            raise ConfigurationError(
                f"Number of clusters must be between {low} and {high}, got {num_clusters}"
            )

    def cluster_trips(self, observations, num_clusters=None, random_state=None):
        """
        Cluster trip observations by their feature value.

        Args:
            observations: List of Observation objects
            num_clusters: Number of clusters to create (defaults to config)
            random_state: Seed or numpy Generator for the first centroid
                (defaults to config RANDOM_SEED)

        Returns:
            List of labelled Cluster objects sorted by centroid
        """
        if num_clusters is None:
            num_clusters = self.config.NUM_CLUSTERS
        self.validate_num_clusters(num_clusters)

        if random_state is None:
            random_state = self.config.RANDOM_SEED

        sample = list(observations)[:self.config.CLUSTER_SAMPLE_LIMIT]

        self.clusterer = KMeansClusterer(
            n_clusters=num_clusters,
            max_iter=self.config.MAX_ITERATIONS,
            tol=self.config.TOLERANCE,
            random_state=random_state
        )
        clusters = self.clusterer.cluster(sample)

        for cluster in clusters:
            cluster.label = self.get_cluster_label(cluster.centroid)

        if clusters and getattr(self.config, 'VERBOSE', False):
            if self.clusterer.converged_:
                print(f"   K-Means converged after {self.clusterer.n_iter_} iterations")
            else:
                print(f"   K-Means stopped at the iteration cap ({self.clusterer.n_iter_})")

        return clusters

    def get_cluster_label(self, centroid: float) -> str:
        """Name a cluster by the distance band its centroid falls in."""
        for upper, label in self.config.DISTANCE_LABEL_THRESHOLDS:
            if centroid < upper:
                return label
        return self.config.LONG_DISTANCE_LABEL

    def summarize(self, clusters: list[Cluster]) -> list[dict]:
        """Return one summary dict per cluster, in centroid order."""
        return [cluster.to_dict() for cluster in clusters]

    def get_total_members(self, clusters: list[Cluster]) -> int:
        return sum(cluster.get_member_count() for cluster in clusters)
