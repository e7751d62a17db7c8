"""Configuration module for ETH Balance Watcher.

Usage:
    from ethwatch.config import load_settings, load_wallets

    settings = load_settings()  # Cached singleton
    wallets = load_wallets(settings.wallets_file)

Note:
    We intentionally don't export a module-level `settings` instance
    because that would fail on import if the configuration is invalid.
"""

from ethwatch.config.settings import Settings, get_settings, load_settings
from ethwatch.config.wallets import load_wallets, parse_wallets

__all__ = ["Settings", "get_settings", "load_settings", "load_wallets", "parse_wallets"]
