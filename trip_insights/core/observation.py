"""Observation model - a single trip reduced to one clustering feature plus metrics."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


@dataclass(frozen=True)
class Observation:
    """An immutable trip observation.

    ``feature`` is the value the clusterer partitions on (e.g. trip distance);
    ``aux_metrics`` holds the per-trip metrics averaged inside each cluster.
    """

    id: Any
    feature: float
    aux_metrics: Mapping[str, float] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "feature", float(self.feature))
        metrics = {name: float(value) for name, value in self.aux_metrics.items()}
        object.__setattr__(self, "aux_metrics", MappingProxyType(metrics))

    def get_metric(self, name: str, default: float = 0.0) -> float:
        return self.aux_metrics.get(name, default)

    def to_dict(self) -> dict:
        return {'id': self.id, 'feature': self.feature, **self.aux_metrics}

    def __repr__(self) -> str:
        return f"Observation(id={self.id}, feature={self.feature:g})"
