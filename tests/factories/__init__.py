"""Test data factories using factory_boy.

These factories generate realistic test data for ETH Balance Watcher models.
"""

from tests.factories.wallet import WalletFactory, generate_ethereum_address

__all__ = ["WalletFactory", "generate_ethereum_address"]
