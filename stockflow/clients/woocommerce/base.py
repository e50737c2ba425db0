import logging
from dataclasses import dataclass
from typing import Any

import httpx

from stockflow.clients.http import HttpClient
from stockflow.clients.woocommerce.errors import (
    WooCommerceError,
    WooCommerceNetworkError,
    raise_for_error_response,
)
from stockflow.clients.woocommerce.utils import encode_query, parse_pagination_headers

logger = logging.getLogger(__name__)

USER_AGENT = "stockflow-woocommerce/0.1.0"

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
    "User-Agent": USER_AGENT,
}

# Lower-cased fragments that mark an arbitrary exception as a transport failure.
_NETWORK_HINTS = ("fetch", "network", "econnrefused", "connection refused")


def _looks_like_network_failure(error: Exception) -> bool:
    text = str(error).lower()
    return any(hint in text for hint in _NETWORK_HINTS)


@dataclass(frozen=True)
class Page:
    """One page of a listing plus the totals the API reports in its headers."""
    items: list
    total: int | float
    total_pages: int | float


class WooCommerceClient:
    """
    Executes requests against the WooCommerce REST API.

    Builds the endpoint URL, lets the configured httpx.Auth authenticate it,
    and turns every failure into a WooCommerceError subclass. Resource
    clients compose the verb helpers below; nothing else talks to HttpClient.
    """

    def __init__(self, auth: httpx.Auth, http: HttpClient):
        self.auth = auth
        self.http = http

    async def _send(
        self,
        path: str,
        method: str,
        params: dict | None,
        body: Any,
        headers: dict | None,
    ) -> httpx.Response:
        query = encode_query(params)
        if query:
            path = f"{path}{'&' if '?' in path else '?'}{query}"

        # Case-insensitive merge; caller headers replace defaults.
        merged = httpx.Headers(DEFAULT_HEADERS)
        merged.update(headers or {})

        try:
            return await self.http.request(
                method,
                path,
                auth=self.auth,
                headers=merged,
                json=body,
            )
        except WooCommerceError:
            raise
        except httpx.HTTPStatusError as e:
            raise_for_error_response(e.response)
        except (TimeoutError, httpx.TimeoutException) as e:
            raise WooCommerceNetworkError("Request timeout", e) from e
        except httpx.TransportError as e:
            raise WooCommerceNetworkError("Network request failed", e) from e
        except Exception as e:
            if _looks_like_network_failure(e):
                raise WooCommerceNetworkError("Network request failed", e) from e
            raise WooCommerceError(str(e) or "Unknown error occurred") from e

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if response.status_code == 204:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise WooCommerceError(str(e), response.status_code) from e

    async def execute(
        self,
        path: str,
        method: str = "GET",
        params: dict | None = None,
        body: Any = None,
        headers: dict | None = None,
    ) -> Any:
        """
        Sends one request and returns the decoded JSON payload.

        `path` is relative to /wp-json/{version}/. A 204 yields an empty dict.
        """
        response = await self._send(path, method, params, body, headers)
        return self._decode(response)

    async def get(self, path: str, params: dict | None = None) -> Any:
        return await self.execute(path, "GET", params=params)

    async def post(self, path: str, body: Any = None) -> Any:
        return await self.execute(path, "POST", body=body)

    async def put(self, path: str, body: Any = None) -> Any:
        return await self.execute(path, "PUT", body=body)

    async def delete(self, path: str, params: dict | None = None) -> Any:
        return await self.execute(path, "DELETE", params=params)

    async def batch(self, path: str, body: Any) -> Any:
        # WooCommerce takes batch operations as POST to <resource>/batch.
        return await self.execute(path, "POST", body=body)

    async def list_page(self, path: str, params: dict | None = None) -> Page:
        """GETs a listing and keeps the X-WP-Total / X-WP-TotalPages headers."""
        response = await self._send(path, "GET", params, None, None)
        total, total_pages = parse_pagination_headers(response.headers)
        items = self._decode(response)
        return Page(items=items if isinstance(items, list) else [], total=total, total_pages=total_pages)

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> "WooCommerceClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
