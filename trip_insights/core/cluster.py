"""Cluster model - represents a group of trips with similar feature values."""
from __future__ import annotations

from trip_insights.core.observation import Observation


class Cluster:
    """A group of observations sharing the nearest centroid."""

    def __init__(self, id: int, centroid: float) -> None:
        self.id = id
        self.centroid = float(centroid)
        self.members: list[Observation] = []
        self.aggregates: dict[str, float] = {}
        self.label: str | None = None

    def add_member(self, observation: Observation) -> None:
        """Add an observation to this cluster."""
        self.members.append(observation)

    def compute_aggregates(self, names: list[str] | None = None) -> dict[str, float]:
        """
        Recompute the mean of every auxiliary metric over the members.

        Args:
            names: Metric names to aggregate. Defaults to the names found on
                the members, in first-seen order.

        Returns:
            Mapping of metric name to mean value (0.0 for an empty cluster;
            a member lacking a metric contributes 0.0 to it)
        """
        if names is None:
            names = []
            for member in self.members:
                for name in member.aux_metrics:
                    if name not in names:
                        names.append(name)

        count = len(self.members)
        self.aggregates = {
            name: sum(m.get_metric(name) for m in self.members) / count if count else 0.0
            for name in names
        }
        return self.aggregates

    def get_aggregate(self, name: str) -> float:
        """Mean of a metric over the members, 0.0 when unknown or empty."""
        return self.aggregates.get(name, 0.0)

    def get_member_count(self) -> int:
        return len(self.members)

    def is_empty(self) -> bool:
        return len(self.members) == 0

    def get_features(self) -> list[float]:
        """Return the clustering feature of every member, in member order."""
        return [m.feature for m in self.members]

    def get_stats(self) -> dict:
        """Return statistics about this cluster."""
        features = self.get_features()
        stats = {
            'id': self.id,
            'centroid': self.centroid,
            'count': self.get_member_count(),
            'aggregates': dict(self.aggregates),
        }
        if features:
            stats['min_feature'] = min(features)
            stats['max_feature'] = max(features)
        if self.label:
            stats['label'] = self.label
        return stats

    def to_dict(self) -> dict:
        return {
            'cluster_index': self.id,
            'centroid': self.centroid,
            'count': self.get_member_count(),
            'aggregates': dict(self.aggregates),
            'label': self.label,
        }

    def __repr__(self) -> str:
        return f"Cluster(id={self.id}, centroid={self.centroid:.3f}, members={len(self.members)})"

    def __str__(self) -> str:
        name = f" ({self.label})" if self.label else ""
        return f"Cluster {self.id}{name}: {self.get_member_count()} trips around {self.centroid:.2f}"
