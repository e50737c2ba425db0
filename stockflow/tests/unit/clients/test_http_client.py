import asyncio
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

import httpx

from stockflow.clients.http import HttpClient


def _make_response(json_data=None, status_code=200):
    """Helper to build a mock httpx response."""
    mock_response = MagicMock()
    mock_response.status_code = status_code
    mock_response.json.return_value = json_data if json_data is not None else {"ok": True}
    mock_response.raise_for_status.return_value = None
    return mock_response


class TestHttpClientInit:
    def test_creates_async_client_when_none_injected(self):
        with patch("stockflow.clients.http.httpx.AsyncClient") as mock_client_cls:
            HttpClient(base_url="https://example.com", timeout=10.0)
            mock_client_cls.assert_called_once()

    def test_default_client_follows_redirects(self):
        with patch("stockflow.clients.http.httpx.AsyncClient") as mock_client_cls:
            HttpClient(base_url="https://example.com", timeout=10.0)
            assert mock_client_cls.call_args.kwargs["follow_redirects"] is True

    def test_uses_injected_client_as_is(self):
        with patch("stockflow.clients.http.httpx.AsyncClient") as mock_client_cls:
            injected_client = AsyncMock()
            HttpClient(base_url="https://example.com", client=injected_client)
            mock_client_cls.assert_not_called()

    def test_strips_trailing_slash_from_base_url(self):
        client = HttpClient(base_url="https://example.com/", client=AsyncMock())
        assert client.base_url == "https://example.com"


class TestHttpClientRequest:
    def setup_method(self):
        self.mock_client = AsyncMock()
        self.client = HttpClient(base_url="https://example.com/wp-json/wc/v3", client=self.mock_client)

    async def test_returns_response_on_success(self):
        response = _make_response(json_data={"id": 1})
        self.mock_client.request.return_value = response
        result = await self.client.request("GET", "products/1")
        assert result is response

    async def test_passes_correct_args_to_client(self):
        self.mock_client.request.return_value = _make_response()
        await self.client.request("get", "/products?page=2", headers={"x-custom": "val"})
        self.mock_client.request.assert_called_once_with(
            "GET",
            "https://example.com/wp-json/wc/v3/products?page=2",
            auth=None,
            headers={"x-custom": "val"},
            json=None,
        )

    async def test_forwards_auth_and_json_body(self):
        auth = MagicMock(spec=httpx.Auth)
        self.mock_client.request.return_value = _make_response()
        await self.client.request("POST", "products", auth=auth, json={"name": "Mug"})
        kwargs = self.mock_client.request.call_args.kwargs
        assert kwargs["auth"] is auth
        assert kwargs["json"] == {"name": "Mug"}

    async def test_raises_and_logs_on_http_status_error(self):
        mock_response = _make_response(status_code=400)
        mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "400 Bad Request", request=MagicMock(), response=mock_response
        )
        self.mock_client.request.return_value = mock_response

        with patch("stockflow.clients.http.logger") as mock_logger:
            with pytest.raises(httpx.HTTPStatusError):
                await self.client.request("GET", "products")
            mock_logger.error.assert_called_once()

    async def test_raises_and_logs_on_transport_error(self):
        self.mock_client.request.side_effect = httpx.ConnectError("refused", request=MagicMock())

        with patch("stockflow.clients.http.logger") as mock_logger:
            with pytest.raises(httpx.ConnectError):
                await self.client.request("GET", "products")
            mock_logger.error.assert_called_once()

    async def test_raises_timeout_error_when_deadline_expires(self):
        async def slow_request(*args, **kwargs):
            await asyncio.sleep(1)

        self.mock_client.request.side_effect = slow_request
        client = HttpClient(base_url="https://example.com", client=self.mock_client, timeout=0.05)

        with pytest.raises(TimeoutError):
            await client.request("GET", "products")

    async def test_aclose_closes_underlying_client(self):
        await self.client.aclose()
        self.mock_client.aclose.assert_awaited_once()
