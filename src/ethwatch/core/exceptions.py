"""ETH Balance Watcher exception hierarchy.

This module defines the base exception class and specialized exceptions
for the error categories of the watcher:

- Startup errors (ConfigurationError, ConnectivityError) are fatal and
  handled by the application driver before the monitor starts.
- RPCError is raised per balance query and recovered inside the monitor.
"""


class EthWatchError(Exception):
    """Base exception for all ETH Balance Watcher errors.

    All custom exceptions should inherit from this class
    to enable consistent error handling and logging.
    """

    pass


class ConfigurationError(EthWatchError):
    """Raised when configuration is invalid or missing.

    Use this for issues with environment variables, the YAML config file,
    or the wallets file.

    Example:
        raise ConfigurationError("invalid format on line 3: expected 'name:address'")
    """

    pass


class ConnectivityError(EthWatchError):
    """Raised when the Ethereum RPC endpoint cannot be reached at startup.

    Example:
        raise ConnectivityError("Failed to get chain ID: connection refused")
    """

    pass


class ExternalServiceError(EthWatchError):
    """Raised when an HTTP call to an external service fails.

    Attributes:
        service: Name or base URL of the external service that failed.
        status_code: HTTP status code if available, None otherwise.

    Example:
        raise ExternalServiceError(service="https://rpc.example", message="Bad Gateway", status_code=502)
    """

    def __init__(
        self,
        service: str,
        message: str,
        status_code: int | None = None,
    ) -> None:
        self.service = service
        self.status_code = status_code
        super().__init__(f"{service}: {message}")


class RPCError(EthWatchError):
    """Raised when a single balance query fails.

    Covers transport failures, timeouts, JSON-RPC error objects returned
    by the node and malformed results.

    Attributes:
        address: The wallet address being queried (if available).

    Example:
        raise RPCError("failed to get balance: timeout", address="0xabc...")
    """

    def __init__(self, message: str, address: str | None = None) -> None:
        super().__init__(message)
        self.address = address
