"""Unit tests for the Prometheus metrics sink."""

from decimal import Decimal

import pytest

from ethwatch.metrics.prometheus import PrometheusMetrics

LABELS = {"name": "treasury", "address": "0x742d35Cc6634C0532925a3b844Bc454e4438f44e"}


@pytest.fixture
def metrics() -> PrometheusMetrics:
    return PrometheusMetrics()


class TestPrometheusMetrics:
    """Tests for metric updates on success and error."""

    def test_record_success_sets_gauges_and_histogram(self, metrics: PrometheusMetrics) -> None:
        """
        Given: A fresh registry
        When: A successful check is recorded
        Then: Wei, ether, timestamp gauges and one duration sample are written
        """
        metrics.record_success(
            LABELS["name"],
            LABELS["address"],
            1_500_000_000_000_000_000,
            Decimal("1.5"),
            1_700_000_000.0,
            0.25,
        )

        registry = metrics.registry
        assert registry.get_sample_value("eth_wallet_balance_wei", LABELS) == 1.5e18
        assert registry.get_sample_value("eth_wallet_balance_ether", LABELS) == 1.5
        assert (
            registry.get_sample_value("eth_wallet_last_check_timestamp", LABELS)
            == 1_700_000_000.0
        )
        assert registry.get_sample_value("eth_wallet_check_duration_seconds_count", LABELS) == 1
        assert registry.get_sample_value("eth_wallet_check_duration_seconds_sum", LABELS) == 0.25
        assert registry.get_sample_value("eth_wallet_check_errors_total", LABELS) is None

    def test_record_error_increments_counter(self, metrics: PrometheusMetrics) -> None:
        metrics.record_error(LABELS["name"], LABELS["address"])
        metrics.record_error(LABELS["name"], LABELS["address"])

        registry = metrics.registry
        assert registry.get_sample_value("eth_wallet_check_errors_total", LABELS) == 2
        assert registry.get_sample_value("eth_wallet_balance_wei", LABELS) is None
        assert registry.get_sample_value("eth_wallet_check_duration_seconds_count", LABELS) is None

    def test_labels_are_per_wallet(self, metrics: PrometheusMetrics) -> None:
        other = {"name": "hot", "address": "0x8ba1f109551bD432803012645Ac136ddd64DBA72"}

        metrics.record_success(LABELS["name"], LABELS["address"], 1, Decimal("1E-18"), 1.0, 0.1)
        metrics.record_success(other["name"], other["address"], 2 * 10**18, Decimal(2), 1.0, 0.1)

        assert metrics.registry.get_sample_value("eth_wallet_balance_ether", other) == 2.0
        assert metrics.registry.get_sample_value("eth_wallet_balance_wei", LABELS) == 1.0

    def test_instances_use_separate_registries(self) -> None:
        """Two sinks can coexist without duplicate timeseries errors."""
        first = PrometheusMetrics()
        second = PrometheusMetrics()

        first.record_error(LABELS["name"], LABELS["address"])

        assert first.registry is not second.registry
        assert second.registry.get_sample_value("eth_wallet_check_errors_total", LABELS) is None

    def test_render_exposes_metric_families(self, metrics: PrometheusMetrics) -> None:
        metrics.record_success(LABELS["name"], LABELS["address"], 10**18, Decimal(1), 1.0, 0.1)

        output = metrics.render().decode()

        assert "eth_wallet_balance_wei" in output
        assert "eth_wallet_balance_ether" in output
        assert "eth_wallet_last_check_timestamp" in output
        assert "eth_wallet_check_duration_seconds_bucket" in output
        assert 'name="treasury"' in output
        assert metrics.content_type.startswith("text/plain")
