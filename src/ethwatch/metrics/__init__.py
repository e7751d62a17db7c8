"""Metrics sinks."""

from ethwatch.metrics.prometheus import MetricsSink, PrometheusMetrics

__all__ = ["MetricsSink", "PrometheusMetrics"]
