"""Ethereum JSON-RPC client for balance queries.

This module provides the balance query adapter used by the monitor.
Each call is a single JSON-RPC request bounded by a per-call timeout,
so one stalled request cannot block a whole check round.

The client extends BaseAPIClient to inherit:
- Lazy httpx client creation
- HTTP/transport error mapping
- Proper resource cleanup
"""

import asyncio
import itertools
from decimal import Decimal
from typing import Any, Protocol

import structlog

from ethwatch.core.exceptions import ConnectivityError, ExternalServiceError, RPCError
from ethwatch.services.base import BaseAPIClient
from ethwatch.services.ethereum.units import wei_to_ether

log = structlog.get_logger(__name__)

DEFAULT_TIMEOUT = 10.0
CONNECT_TIMEOUT = 5.0


class BalanceQuery(Protocol):
    """Capability the monitor needs: fetch a balance in wei."""

    async def get_balance(self, address: str) -> int: ...


class EthereumRPCClient(BaseAPIClient):
    """Client for Ethereum JSON-RPC balance queries.

    Attributes:
        base_url: Ethereum RPC endpoint URL.
        timeout: Upper bound for a single balance query in seconds.

    Example:
        client = EthereumRPCClient("https://eth.llamarpc.com")
        chain_id = await client.connect()
        wei = await client.get_balance("0x742d35Cc6634C0532925a3b844Bc454e4438f44e")
        await client.close()
    """

    def __init__(self, rpc_url: str, timeout: float = DEFAULT_TIMEOUT) -> None:
        """Initialize the client.

        Args:
            rpc_url: Ethereum JSON-RPC endpoint URL.
            timeout: Per-call timeout in seconds (default: 10).
        """
        super().__init__(
            base_url=rpc_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )
        self._request_ids = itertools.count(1)

    async def _call(self, method: str, params: list[Any]) -> Any:
        """Send one JSON-RPC request and return its ``result``.

        Raises:
            ExternalServiceError: On HTTP or transport failure.
            RPCError: If the node answers with an error object or no result.
        """
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._request_ids),
            "method": method,
            "params": params,
        }

        # Absolute URL: a relative "" would gain a trailing slash from httpx
        response = await self.post(self.base_url, json=payload)

        try:
            data = response.json()
        except ValueError as e:
            raise RPCError(f"{method}: invalid JSON response: {e}") from e

        if not isinstance(data, dict):
            raise RPCError(f"{method}: unexpected response {data!r}")

        error = data.get("error")
        if error is not None:
            if isinstance(error, dict):
                message = f"{error.get('message', 'unknown error')} (code {error.get('code')})"
            else:
                message = str(error)
            raise RPCError(f"{method}: {message}")

        if "result" not in data or data["result"] is None:
            raise RPCError(f"{method}: response has no result")

        return data["result"]

    @staticmethod
    def _parse_quantity(value: Any) -> int:
        """Decode a JSON-RPC hex quantity (``0x...``) into an int."""
        if not isinstance(value, str) or not value.startswith("0x"):
            raise ValueError(f"expected hex quantity, got {value!r}")
        return int(value, 16)

    async def connect(self) -> int:
        """Verify connectivity by fetching the chain ID.

        Returns:
            The chain ID reported by the node.

        Raises:
            ConnectivityError: If the node is unreachable or answers badly.
        """
        try:
            result = await asyncio.wait_for(
                self._call("eth_chainId", []), timeout=CONNECT_TIMEOUT
            )
            chain_id = self._parse_quantity(result)
        except (TimeoutError, ExternalServiceError, RPCError, ValueError) as e:
            raise ConnectivityError(f"failed to get chain ID: {e}") from e

        log.info("ethereum_rpc_connected", base_url=self.base_url, chain_id=chain_id)
        return chain_id

    async def get_balance(self, address: str) -> int:
        """Get the latest balance of an address in wei.

        Args:
            address: Ethereum address (``0x`` + 40 hex chars).

        Returns:
            Balance in wei (non-negative).

        Raises:
            RPCError: If the call fails, times out or returns garbage.
        """
        try:
            result = await asyncio.wait_for(
                self._call("eth_getBalance", [address, "latest"]),
                timeout=self.timeout,
            )
            balance = self._parse_quantity(result)
        except TimeoutError as e:
            raise RPCError(
                f"failed to get balance for {address}: timed out after {self.timeout}s",
                address=address,
            ) from e
        except (ExternalServiceError, RPCError, ValueError) as e:
            raise RPCError(
                f"failed to get balance for {address}: {e}",
                address=address,
            ) from e

        if balance < 0:
            raise RPCError(
                f"failed to get balance for {address}: negative balance {balance}",
                address=address,
            )

        return balance

    async def get_balance_in_ether(self, address: str) -> Decimal:
        """Get the latest balance of an address in ether.

        Raises:
            RPCError: If the underlying balance query fails.
        """
        return wei_to_ether(await self.get_balance(address))
