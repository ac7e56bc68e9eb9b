"""KMeans Clusterer - one-dimensional Lloyd's algorithm with farthest-point seeding."""
from __future__ import annotations

import math
from typing import Iterable

import numpy as np

from trip_insights.core.cluster import Cluster
from trip_insights.core.observation import Observation
from trip_insights.errors import ConfigurationError


class KMeansClusterer:
    """
    KMeans clustering over a single scalar feature.

    Fitted attributes follow the scikit-learn naming: ``cluster_centers_``,
    ``labels_``, ``inertia_`` and ``n_iter_``. Nothing is shared between
    calls; every fit works on its own arrays.
    """

    def __init__(
        self,
        n_clusters: int = 3,
        max_iter: int = 100,
        tol: float = 0.001,
        random_state: int | np.random.Generator | None = None,
    ) -> None:
        if isinstance(n_clusters, bool) or not isinstance(n_clusters, (int, np.integer)):
            raise ConfigurationError(f"n_clusters must be an integer, got {n_clusters!r}")
        if n_clusters < 1:
            raise ConfigurationError(f"n_clusters must be at least 1, got {n_clusters}")
        if isinstance(max_iter, bool) or not isinstance(max_iter, (int, np.integer)):
            raise ConfigurationError(f"max_iter must be an integer, got {max_iter!r}")
        if max_iter < 0:
            raise ConfigurationError(f"max_iter must not be negative, got {max_iter}")
        if not isinstance(tol, (int, float)) or not math.isfinite(tol) or tol < 0:
            raise ConfigurationError(f"tol must be a finite non-negative number, got {tol!r}")

        self.n_clusters = int(n_clusters)
        self.max_iter = int(max_iter)
        self.tol = float(tol)
        self.random_state = random_state
        self.cluster_centers_: np.ndarray | None = None
        self.labels_: np.ndarray | None = None
        self.inertia_: float | None = None
        self.n_iter_: int = 0
        self.converged_: bool = False

    def _init_centroids(self, features: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        """
        Farthest-point seeding.

        The first centroid is a uniformly random point. Each next centroid is
        the point farthest from its nearest chosen centroid; np.argmax keeps
        the first point in input order on ties.
        """
        first = features[rng.integers(len(features))]
        centroids = [first]
        nearest = np.abs(features - first)

        for _ in range(1, self.n_clusters):
            chosen = features[int(np.argmax(nearest))]
            centroids.append(chosen)
            nearest = np.minimum(nearest, np.abs(features - chosen))

        return np.array(centroids, dtype=float)

    @staticmethod
    def _assign(features: np.ndarray, centroids: np.ndarray) -> np.ndarray:
        # argmin returns the lowest centroid index on equal distances
        distances = np.abs(features[:, np.newaxis] - centroids[np.newaxis, :])
        return distances.argmin(axis=1)

    def _update(self, features: np.ndarray, labels: np.ndarray, centroids: np.ndarray) -> np.ndarray:
        sums = np.bincount(labels, weights=features, minlength=self.n_clusters)
        counts = np.bincount(labels, minlength=self.n_clusters)

        new_centroids = centroids.copy()
        filled = counts > 0
        new_centroids[filled] = sums[filled] / counts[filled]
        return new_centroids

    def _has_converged(self, old: np.ndarray, new: np.ndarray) -> bool:
        return bool(np.all(np.abs(old - new) <= self.tol))

    def fit(self, features: Iterable[float]) -> KMeansClusterer:
        """
        Fit centroids to a sequence of scalar features.

        Args:
            features: Scalar values to partition

        Returns:
            self
        """
        features = np.array(list(features), dtype=float)
        self.n_iter_ = 0
        self.converged_ = False

        if features.size == 0:
            self.cluster_centers_ = np.empty(0, dtype=float)
            self.labels_ = np.empty(0, dtype=int)
            self.inertia_ = 0.0
            return self

        rng = np.random.default_rng(self.random_state)
        centroids = self._init_centroids(features, rng)
        labels = None

        while self.n_iter_ < self.max_iter:
            labels = self._assign(features, centroids)
            new_centroids = self._update(features, labels, centroids)
            self.n_iter_ += 1

            self.converged_ = self._has_converged(centroids, new_centroids)
            centroids = new_centroids
            if self.converged_:
                break

        # max_iter == 0 leaves the seeds in place; members still need a home
        if labels is None:
            labels = self._assign(features, centroids)

        self.cluster_centers_ = centroids
        self.labels_ = labels
        self.inertia_ = float(np.sum((features - centroids[labels]) ** 2))
        return self

    def cluster(self, observations: Iterable[Observation]) -> list[Cluster]:
        """
        Partition observations into ``n_clusters`` groups by feature proximity.

        Args:
            observations: Observations to cluster (not modified)

        Returns:
            List of exactly ``n_clusters`` Cluster objects sorted ascending by
            centroid, or an empty list when there are no observations
        """
        observations = list(observations)
        if not observations:
            self.fit([])
            return []

        self.fit(obs.feature for obs in observations)

        metric_names: list[str] = []
        for obs in observations:
            for name in obs.aux_metrics:
                if name not in metric_names:
                    metric_names.append(name)

        clusters = [Cluster(id=i, centroid=c) for i, c in enumerate(self.cluster_centers_)]
        for obs, label in zip(observations, self.labels_):
            clusters[int(label)].add_member(obs)

        for cluster in clusters:
            cluster.compute_aggregates(metric_names)

        clusters.sort(key=lambda c: c.centroid)
        for index, cluster in enumerate(clusters):
            cluster.id = index

        return clusters
