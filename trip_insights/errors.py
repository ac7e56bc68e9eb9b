"""Errors raised by the analytics engine."""


class ConfigurationError(ValueError):
    """Raised when a clusterer, detector, or service is given invalid settings."""
