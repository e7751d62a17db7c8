"""Shared pytest fixtures for ETH Balance Watcher tests.

This module provides fixtures for:
- Settings isolation (cache reset, clean working directory)
- Test data factories
- Fake balance query adapter and recording metrics sink

Usage:
    @pytest.mark.asyncio
    async def test_something(wallets, fake_client, recording_metrics):
        monitor = BalanceMonitor(fake_client, recording_metrics, wallets, 10.0)
        results = await monitor.check_once()
"""

import os
from collections.abc import Generator
from pathlib import Path

import pytest

from ethwatch.core.models import Wallet
from tests.factories.wallet import WalletFactory
from tests.support.fakes import FakeBalanceClient, RecordingMetrics

# =============================================================================
# Environment Configuration
# =============================================================================

_SETTINGS_ENV_VARS = (
    "CONFIG_FILE",
    "ETH_RPC_URL",
    "ETHEREUM_RPC",
    "CHECK_INTERVAL",
    "METRICS_PORT",
    "WALLETS_FILE",
    "RPC_TIMEOUT",
    "SHUTDOWN_GRACE_PERIOD",
    "LOG_LEVEL",
    "DEBUG",
    "HOST",
)


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Reset the cached settings singleton around every test."""
    from ethwatch.config.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def isolated_env(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Run in an empty directory with no watcher env vars set.

    Keeps a developer's .env, config.yaml or exported variables from
    leaking into settings tests.
    """
    for name in _SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    for name in list(os.environ):
        if name.upper() in _SETTINGS_ENV_VARS:
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield tmp_path


# =============================================================================
# Factory Fixtures
# =============================================================================


@pytest.fixture
def wallet_factory() -> type[WalletFactory]:
    """Provide wallet factory for creating test wallets."""
    return WalletFactory


@pytest.fixture
def wallets() -> list[Wallet]:
    """Three distinct wallets."""
    return WalletFactory.build_batch(3)


# =============================================================================
# Fake Collaborators
# =============================================================================


@pytest.fixture
def fake_client() -> FakeBalanceClient:
    """Balance adapter returning 0 wei for every address."""
    return FakeBalanceClient()


@pytest.fixture
def recording_metrics() -> RecordingMetrics:
    """Metrics sink that records every call."""
    return RecordingMetrics()
