"""Trip Analyzer - main orchestrator for trip clustering and outlier detection."""
from trip_insights.services.observations import ObservationService
from trip_insights.services.clustering import ClusteringService
from trip_insights.services.outliers import OutlierService
from trip_insights.utils.data_generator import TripDataGenerator


class TripAnalyzer:
    """Main orchestrator that coordinates all services for trip analysis."""

    def __init__(self, config):
        self.config = config

        # Data containers
        self.records = []
        self.observations = []
        self.clusters = []
        self.outlier_report = None

        # Services
        self.observation_service = ObservationService(config)
        self.clustering_service = ClusteringService(config)
        self.outlier_service = OutlierService(config)
        self.data_generator = TripDataGenerator(
            center=config.CITY_CENTER,
            anomaly_rate=config.ANOMALY_RATE
        )

    def _print(self, message):
        if getattr(self.config, 'VERBOSE', False):
            print(message)

    def load_trips(self, trips=None, count=None, seed=None):
        """Load trip rows, generating synthetic ones when none are given."""
        if trips is None:
            if count is None:
                count = self.config.NUM_TRIPS
            seed = seed if seed is not None else 42
            self._print(f"[1] Generating {count} synthetic trips...")
            trips = self.data_generator.generate(n=count, seed=seed)
        else:
            self._print("[1] Loading trips...")

        self.records = self.observation_service.to_records(trips)
        self._print(f"    OK: {len(self.records)} trips loaded")

        return self.records

    def build_observations(self, feature=None):
        """Reduce trip rows to observations on the clustering feature."""
        feature = feature or self.config.CLUSTER_FEATURE
        self._print(f"[2] Building observations on '{feature}'...")
        self.observations = self.observation_service.from_records(self.records, feature=feature)
        self._print(f"    OK: {len(self.observations)} observations")

        return self.observations

    def create_clusters(self, num_clusters=None, random_state=None):
        """Cluster the observations."""
        if num_clusters is None:
            num_clusters = self.config.NUM_CLUSTERS
        self._print(f"[3] Creating {num_clusters} clusters...")

        self.clusters = self.clustering_service.cluster_trips(
            self.observations,
            num_clusters,
            random_state=random_state
        )
        for cluster in self.clusters:
            self._print(f"    {cluster}")

        return self.clusters

    def detect_outliers(self, metric=None):
        """Flag trips whose metric lies outside the IQR range."""
        metric = metric or self.config.OUTLIER_METRIC
        self._print(f"[4] Detecting outliers in '{metric}'...")

        self.outlier_report = self.outlier_service.detect_trip_outliers(self.records, metric)
        report = self.outlier_report
        self._print(f"    OK: {report.outlier_count}/{report.total_count} outliers "
                    f"({report.outlier_percentage:.1f}%), "
                    f"normal range [{report.lower_bound:.2f}, {report.upper_bound:.2f}]")

        return self.outlier_report

    def get_summary(self):
        """Return the analysis results as plain dicts."""
        return {
            'total_trips': len(self.records),
            'clusters': self.clustering_service.summarize(self.clusters),
            'outliers': self.outlier_report.to_dict() if self.outlier_report else None,
        }

    def run(self, trips=None, num_clusters=None, random_state=None):
        """Execute the full analysis pipeline."""
        self._print("=" * 60)
        self._print("TRIP INSIGHTS")
        self._print("=" * 60)

        self.load_trips(trips)
        self.build_observations()
        self.create_clusters(num_clusters, random_state=random_state)
        self.detect_outliers()

        self._print("=" * 60)
        return self.get_summary()
