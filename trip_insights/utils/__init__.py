"""Algorithms and helpers with no dependency on configuration."""
