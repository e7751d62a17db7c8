"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, Request

from ethwatch.metrics.prometheus import PrometheusMetrics
from ethwatch.monitor.balance_monitor import BalanceMonitor


def get_monitor(request: Request) -> BalanceMonitor:
    """Get the balance monitor built at app creation."""
    monitor: BalanceMonitor = request.app.state.monitor
    return monitor


def get_metrics(request: Request) -> PrometheusMetrics:
    """Get the Prometheus metrics sink built at app creation."""
    metrics: PrometheusMetrics = request.app.state.metrics
    return metrics


MonitorDep = Annotated[BalanceMonitor, Depends(get_monitor)]
MetricsDep = Annotated[PrometheusMetrics, Depends(get_metrics)]
