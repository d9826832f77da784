"""Base API client for the external HTTP services.

Requests are made once. Failures are mapped to the client's
ExternalServiceError subclass with the upstream status and body kept
verbatim.
"""

from collections.abc import Container
from typing import Any

import httpx
import structlog

from pumplaunch.core.exceptions import ExternalServiceError

log = structlog.get_logger(__name__)


class BaseAPIClient:
    """Base async HTTP client.

    Provides:
    - Lazy client initialization (created on first request)
    - Upstream failures mapped to a service-specific exception
    - Proper resource cleanup

    Attributes:
        base_url: Base URL for all requests.
        timeout: Request timeout in seconds.
        headers: Default headers for all requests.

    Example:
        client = BaseAPIClient(base_url="https://api.example.com")
        response = await client.get("/endpoint")
        await client.close()
    """

    SERVICE_NAME = "http"
    ERROR_CLASS: type[ExternalServiceError] = ExternalServiceError

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
        """Get or create the httpx client (lazy initialization)."""
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

    async def _request(
        self,
        method: str,
        path: str,
        ok_statuses: Container[int] | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """Make a single HTTP request.

        Args:
            method: HTTP method (GET, POST).
            path: Request path (appended to base_url) or absolute URL.
            ok_statuses: Accepted status codes. Any 2xx when None.
            **kwargs: Additional arguments passed to httpx.request.

        Returns:
            httpx.Response on success.

        Raises:
            ExternalServiceError: ERROR_CLASS of the client, on a transport
                error or a status outside ok_statuses.
        """
        client = await self._get_client()

        log.debug("request_start", service=self.SERVICE_NAME, method=method, path=path)

        try:
            response = await client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            log.warning(
                "request_connection_error",
                service=self.SERVICE_NAME,
                method=method,
                path=path,
                error=str(e),
            )
            raise self.ERROR_CLASS(
                service=self.SERVICE_NAME,
                message=f"{type(e).__name__}: {e}",
            ) from e

        ok = (
            response.is_success
            if ok_statuses is None
            else response.status_code in ok_statuses
        )
        if not ok:
            log.warning(
                "request_failed",
                service=self.SERVICE_NAME,
                method=method,
                path=path,
                status_code=response.status_code,
            )
            raise self.ERROR_CLASS(
                service=self.SERVICE_NAME,
                message=response.reason_phrase or "Request failed",
                status_code=response.status_code,
                body=response.text,
            )

        return response

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a GET request."""
        return await self._request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a POST request."""
        return await self._request("POST", path, **kwargs)
