"""ETH Balance Watcher: Prometheus exporter for Ethereum wallet balances."""

__version__ = "1.0.0"
