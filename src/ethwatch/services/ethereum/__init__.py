"""Ethereum RPC client and unit conversion."""

from ethwatch.services.ethereum.rpc_client import BalanceQuery, EthereumRPCClient
from ethwatch.services.ethereum.units import ETHER_DECIMALS, WEI_PER_ETHER, wei_to_ether

__all__ = [
    "ETHER_DECIMALS",
    "WEI_PER_ETHER",
    "BalanceQuery",
    "EthereumRPCClient",
    "wei_to_ether",
]
