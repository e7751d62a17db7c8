"""Base API client over a lazily created httpx.AsyncClient.

Requests are single-attempt: a failed call raises ExternalServiceError and
the caller decides what a failure means. Periodic callers retry naturally
on their next cycle.
"""

from typing import Any

import httpx
import structlog

from ethwatch.core.exceptions import ExternalServiceError

log = structlog.get_logger(__name__)


class BaseAPIClient:
    """Base API client.

    Provides HTTP requests with:
    - Lazy client initialization (created on first request)
    - Uniform error mapping to ExternalServiceError
    - Proper resource cleanup

    Attributes:
        base_url: Base URL for all requests.
        timeout: Request timeout in seconds.
        headers: Default headers for all requests.

    Example:
        client = BaseAPIClient(
            base_url="https://api.example.com",
            headers={"Authorization": "Bearer token"}
        )
        response = await client.get("/endpoint")
        await client.close()
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
    ) -> None:
        """Initialize BaseAPIClient.

        Args:
            base_url: Base URL for all requests.
            timeout: Request timeout in seconds (default: 30).
            headers: Default headers for all requests.
        """
        self.base_url = base_url
        self.timeout = timeout
        self.headers = headers or {}
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the httpx client (lazy initialization).

        Returns:
            The httpx AsyncClient instance.
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.headers,
            )
            log.debug("httpx_client_created", base_url=self.base_url)
        return self._client

    async def close(self) -> None:
        """Close the httpx client and release resources."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            log.debug("httpx_client_closed", base_url=self.base_url)

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Make a single HTTP request.

        Args:
            method: HTTP method (GET, POST, ...).
            path: Request path (appended to base_url).
            **kwargs: Additional arguments passed to httpx.request.

        Returns:
            httpx.Response on success.

        Raises:
            ExternalServiceError: On HTTP status errors or transport failures.
        """
        client = await self._get_client()

        try:
            response = await client.request(method, path, **kwargs)
            response.raise_for_status()
            return response

        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            log.warning(
                "request_status_error",
                method=method,
                path=path,
                status_code=status_code,
            )
            raise ExternalServiceError(
                service=self.base_url,
                message=str(e),
                status_code=status_code,
            ) from e

        except httpx.TimeoutException as e:
            log.warning("request_timeout", method=method, path=path, error=str(e))
            raise ExternalServiceError(
                service=self.base_url,
                message=f"request timed out: {e}",
            ) from e

        except httpx.RequestError as e:
            log.warning("request_connection_error", method=method, path=path, error=str(e))
            raise ExternalServiceError(
                service=self.base_url,
                message=f"request failed: {e}",
            ) from e

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a GET request."""
        return await self._request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a POST request."""
        return await self._request("POST", path, **kwargs)
