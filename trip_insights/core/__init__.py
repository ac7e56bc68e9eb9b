"""Domain models: observations, clusters and outlier reports."""
