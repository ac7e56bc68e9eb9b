"""
Tests for the one-dimensional KMeans clusterer.
"""
import numpy as np
import pytest

from trip_insights.core.observation import Observation
from trip_insights.errors import ConfigurationError
from trip_insights.utils.kmeans import KMeansClusterer


def _observations(features, **metrics):
    """Build observations with optional per-index metric lists."""
    return [
        Observation(
            id=i,
            feature=f,
            aux_metrics={name: values[i] for name, values in metrics.items()},
        )
        for i, f in enumerate(features)
    ]


def test_empty_input_returns_empty_list():
    """Test clustering nothing returns no clusters."""
    clusterer = KMeansClusterer(n_clusters=3, random_state=0)

    assert clusterer.cluster([]) == []


@pytest.mark.parametrize("seed", range(6))
def test_bimodal_input_converges_to_modes(seed):
    """Test [1,1,1,9,9,9] with k=2 gives centroids 1 and 9 from any first seed."""
    observations = _observations([1, 1, 1, 9, 9, 9])

    clusters = KMeansClusterer(n_clusters=2, random_state=seed).cluster(observations)

    assert [c.centroid for c in clusters] == [1.0, 9.0]
    assert [c.get_member_count() for c in clusters] == [3, 3]
    assert [m.id for m in clusters[0].members] == [0, 1, 2]
    assert [m.id for m in clusters[1].members] == [3, 4, 5]


def test_identical_values_with_more_clusters_than_distinct_points():
    """Test [5,5,5] with k=3 gives 3 clusters, some empty, all centroids 5."""
    observations = _observations([5, 5, 5])

    clusters = KMeansClusterer(n_clusters=3, random_state=1).cluster(observations)

    assert len(clusters) == 3
    assert all(c.centroid == 5.0 for c in clusters)
    assert sum(c.get_member_count() for c in clusters) == 3
    assert any(c.is_empty() for c in clusters)


def test_identical_values_all_land_in_first_cluster():
    """Test equal-distance ties resolve to the lowest centroid index."""
    clusterer = KMeansClusterer(n_clusters=3, random_state=7)

    clusterer.fit([4.0, 4.0, 4.0, 4.0])

    assert clusterer.labels_.tolist() == [0, 0, 0, 0]
    assert clusterer.cluster_centers_.tolist() == [4.0, 4.0, 4.0]


@pytest.mark.parametrize("k", [1, 2, 3, 5, 10])
def test_returns_exactly_k_sorted_clusters(k):
    """Test the cluster count equals k and centroids ascend."""
    rng = np.random.default_rng(3)
    observations = _observations(rng.lognormal(1.0, 0.8, size=200).tolist())

    clusters = KMeansClusterer(n_clusters=k, random_state=11).cluster(observations)
    centroids = [c.centroid for c in clusters]

    assert len(clusters) == k
    assert centroids == sorted(centroids)
    assert [c.id for c in clusters] == list(range(k))
    assert sum(c.get_member_count() for c in clusters) == 200


def test_members_are_nearest_to_their_centroid():
    """Test every member sits closest to its own cluster's centroid at convergence."""
    observations = _observations([0.5, 0.7, 1.1, 3.0, 3.4, 3.9, 10.0, 12.5, 11.0])

    clusters = KMeansClusterer(n_clusters=3, random_state=2).cluster(observations)
    centroids = [c.centroid for c in clusters]

    for cluster in clusters:
        for member in cluster.members:
            own = abs(member.feature - cluster.centroid)
            assert all(own <= abs(member.feature - c) for c in centroids)


def test_aggregates_are_member_means():
    """Test per-cluster aggregates average each auxiliary metric."""
    observations = _observations(
        [1, 2, 20, 22],
        trip_duration_minutes=[4, 6, 40, 50],
        fare_amount=[5, 7, 50, 54],
    )

    clusters = KMeansClusterer(n_clusters=2, random_state=0).cluster(observations)

    assert clusters[0].aggregates == {
        'trip_duration_minutes': pytest.approx(5.0),
        'fare_amount': pytest.approx(6.0),
    }
    assert clusters[1].aggregates == {
        'trip_duration_minutes': pytest.approx(45.0),
        'fare_amount': pytest.approx(52.0),
    }


def test_empty_cluster_aggregates_are_zero():
    """Test an empty cluster reports 0.0 for every known metric."""
    observations = _observations([5, 5], fare_amount=[10, 12])

    clusters = KMeansClusterer(n_clusters=2, random_state=0).cluster(observations)
    empty = [c for c in clusters if c.is_empty()]

    assert len(empty) == 1
    assert empty[0].aggregates == {'fare_amount': 0.0}


def test_same_seed_gives_same_result():
    """Test an explicit random_state makes runs reproducible."""
    rng = np.random.default_rng(5)
    features = rng.normal(5.0, 3.0, size=300).tolist()

    first = KMeansClusterer(n_clusters=4, random_state=99)
    second = KMeansClusterer(n_clusters=4, random_state=99)
    first.fit(features)
    second.fit(features)

    assert first.cluster_centers_.tolist() == second.cluster_centers_.tolist()
    assert first.labels_.tolist() == second.labels_.tolist()
    assert first.n_iter_ == second.n_iter_


def test_input_is_not_mutated():
    """Test clustering leaves the caller's list untouched."""
    observations = _observations([3, 1, 2, 8, 9])
    snapshot = list(observations)

    KMeansClusterer(n_clusters=2, random_state=0).cluster(observations)

    assert observations == snapshot


def test_farthest_point_seeding_breaks_ties_by_input_order():
    """Test the second seed is the first point at the largest distance."""
    clusterer = KMeansClusterer(n_clusters=2)
    features = np.array([5.0, 0.0, 10.0, 5.0])

    class FixedFirst:
        def integers(self, n):
            return 0

    seeds = clusterer._init_centroids(features, FixedFirst())

    # 0.0 and 10.0 are both 5 away from the first seed; 0.0 comes first
    assert seeds.tolist() == [5.0, 0.0]


def test_iteration_cap_is_respected():
    """Test fit stops after max_iter updates."""
    rng = np.random.default_rng(8)
    features = rng.uniform(0, 100, size=500).tolist()

    clusterer = KMeansClusterer(n_clusters=6, max_iter=1, tol=0.0, random_state=4)
    clusterer.fit(features)

    assert clusterer.n_iter_ == 1


def test_iteration_cap_keeps_last_update_and_last_assignment():
    """Test max_iter=1 returns the once-updated centroids and the seed-based labels."""
    features = np.array([0.0, 1.0, 2.0, 6.0, 10.0])
    clusterer = KMeansClusterer(n_clusters=2, max_iter=1, tol=0.0, random_state=5)

    seeds = clusterer._init_centroids(features, np.random.default_rng(5))
    expected_labels = np.abs(features[:, np.newaxis] - seeds[np.newaxis, :]).argmin(axis=1)
    expected_centers = [features[expected_labels == j].mean() for j in range(2)]

    clusterer.fit(features.tolist())

    assert clusterer.n_iter_ == 1
    assert clusterer.labels_.tolist() == expected_labels.tolist()
    assert clusterer.cluster_centers_.tolist() == pytest.approx(expected_centers)


def test_converges_before_cap():
    """Test a well separated input converges and reports it."""
    clusterer = KMeansClusterer(n_clusters=2, random_state=0)
    clusterer.fit([1.0, 1.2, 0.8, 30.0, 30.5, 29.5])

    assert clusterer.converged_ is True
    assert clusterer.n_iter_ < 100
    assert sorted(clusterer.cluster_centers_.tolist()) == [pytest.approx(1.0), pytest.approx(30.0)]


def test_zero_iterations_keeps_seeds_and_assigns_everything():
    """Test max_iter=0 returns the seed centroids with every point assigned."""
    observations = _observations([1, 2, 3, 50])

    clusters = KMeansClusterer(n_clusters=2, max_iter=0, random_state=0).cluster(observations)

    assert sum(c.get_member_count() for c in clusters) == 4
    assert 50.0 in [c.centroid for c in clusters]


def test_inertia_is_zero_for_exact_modes():
    """Test inertia_ sums squared distances to assigned centroids."""
    clusterer = KMeansClusterer(n_clusters=2, random_state=0)
    clusterer.fit([2.0, 2.0, 7.0, 7.0])

    assert clusterer.inertia_ == 0.0


@pytest.mark.parametrize("kwargs", [
    {'n_clusters': 0},
    {'n_clusters': -2},
    {'n_clusters': 2.5},
    {'n_clusters': True},
    {'max_iter': -1},
    {'tol': -0.1},
    {'tol': float('nan')},
])
def test_invalid_configuration_is_rejected(kwargs):
    """Test invalid settings raise ConfigurationError."""
    with pytest.raises(ConfigurationError):
        KMeansClusterer(**kwargs)


def test_configuration_error_is_value_error():
    """Test ConfigurationError can be caught as ValueError."""
    with pytest.raises(ValueError):
        KMeansClusterer(n_clusters=0)
