import asyncio
import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class HttpClient:
    """
    Generic async HTTP client with a hard per-request deadline.

    Designed to be injected into API-specific clients (WooCommerceClient)
    so that transport concerns are handled in one place. Retrying is left to
    the caller; this class sends each request exactly once.

    Args:
        base_url: Base URL prepended to all request paths.
        client: Optional pre-configured httpx.AsyncClient. If provided, the httpx
                timeout and redirect configuration is skipped and the caller is
                responsible. The overall deadline still applies. Useful for tests.
        timeout: Seconds before a request is abandoned, covering connect, send and
                 the whole response read (default: 30).
    """

    def __init__(
        self,
        base_url: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout), follow_redirects=True)

    async def request(
        self,
        method: str,
        path: str,
        *,
        auth: httpx.Auth | None = None,
        headers: httpx.Headers | dict | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """
        Executes an async HTTP request and returns the response.

        Raises httpx.HTTPStatusError for non-2xx responses, with the response
        attached, and TimeoutError when the deadline expires. The timer is
        scoped to this call and released however it exits.
        """
        method = method.upper()
        url = f"{self.base_url}/{path.lstrip('/')}"
        logger.debug("%s %s", method, url)
        try:
            async with asyncio.timeout(self._timeout):
                response = await self._client.request(
                    method,
                    url,
                    auth=auth,
                    headers=headers,
                    json=json,
                )
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            # The request URL may carry credentials, so only the status is logged.
            logger.error("HTTP %s %s failed with status %d", method, url, e.response.status_code)
            raise
        except httpx.HTTPError as e:
            logger.error("HTTP %s %s failed: %s", method, url, e)
            raise
        except TimeoutError:
            logger.error("HTTP %s %s timed out after %.1fs", method, url, self._timeout)
            raise

    async def aclose(self) -> None:
        await self._client.aclose()
