"""Prometheus metrics sink.

Every PrometheusMetrics instance registers its metrics on its own
CollectorRegistry, so the application builds one sink at startup and
hands it to the monitor and the /metrics endpoint.

Balances are exported as float64 samples. Values beyond ~15 significant
digits lose precision at export; the decimal amounts used elsewhere
stay exact.
"""

from decimal import Decimal
from typing import Protocol

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

LABELS = ("name", "address")


class MetricsSink(Protocol):
    """Write-only metrics capability used by the monitor."""

    def record_success(
        self,
        wallet_name: str,
        address: str,
        raw_amount: int,
        decimal_amount: Decimal,
        check_timestamp: float,
        duration: float,
    ) -> None: ...

    def record_error(self, wallet_name: str, address: str) -> None: ...


class PrometheusMetrics:
    """Wallet balance metrics backed by prometheus_client."""

    content_type = CONTENT_TYPE_LATEST

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry if registry is not None else CollectorRegistry()

        self.balance_wei = Gauge(
            "eth_wallet_balance_wei",
            "Current wallet balance in Wei",
            LABELS,
            registry=self.registry,
        )
        self.balance_ether = Gauge(
            "eth_wallet_balance_ether",
            "Current wallet balance in Ether",
            LABELS,
            registry=self.registry,
        )
        self.last_check = Gauge(
            "eth_wallet_last_check_timestamp",
            "Unix timestamp of the last successful balance check",
            LABELS,
            registry=self.registry,
        )
        self.check_errors = Counter(
            "eth_wallet_check_errors",
            "Total number of balance check errors",
            LABELS,
            registry=self.registry,
        )
        self.check_duration = Histogram(
            "eth_wallet_check_duration_seconds",
            "Duration of balance check in seconds",
            LABELS,
            registry=self.registry,
        )

    def record_success(
        self,
        wallet_name: str,
        address: str,
        raw_amount: int,
        decimal_amount: Decimal,
        check_timestamp: float,
        duration: float,
    ) -> None:
        """Update balance, last check time and duration for a wallet."""
        labels = {"name": wallet_name, "address": address}

        self.balance_wei.labels(**labels).set(float(raw_amount))
        self.balance_ether.labels(**labels).set(float(decimal_amount))
        self.last_check.labels(**labels).set(check_timestamp)
        self.check_duration.labels(**labels).observe(duration)

    def record_error(self, wallet_name: str, address: str) -> None:
        """Count a failed balance check for a wallet."""
        self.check_errors.labels(name=wallet_name, address=address).inc()

    def render(self) -> bytes:
        """Render the registry in the Prometheus text exposition format."""
        return generate_latest(self.registry)
