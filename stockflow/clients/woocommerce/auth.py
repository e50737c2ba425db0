import base64
import hashlib
import hmac
import logging
import secrets
import time
from urllib.parse import parse_qsl, quote

import httpx

from stockflow.clients.woocommerce.config import WooCommerceConfig
from stockflow.clients.woocommerce.utils import encode_query

logger = logging.getLogger(__name__)

SIGNATURE_METHOD = "HMAC-SHA256"
OAUTH_VERSION = "1.0"


def _percent_encode(value: str) -> str:
    """RFC 3986 encoding as OAuth 1.0a requires (only unreserved characters kept)."""
    return quote(value, safe="")


def _base_string_uri(url: httpx.URL) -> str:
    path = url.raw_path.split(b"?", 1)[0].decode("ascii")
    return f"{url.scheme}://{url.netloc.decode('ascii').lower()}{path}"


def _normalized_parameters(url: httpx.URL, oauth_params: dict[str, str]) -> str:
    pairs = parse_qsl(url.query.decode("ascii"), keep_blank_values=True)
    pairs.extend(oauth_params.items())
    encoded = sorted((_percent_encode(k), _percent_encode(v)) for k, v in pairs)
    return "&".join(f"{k}={v}" for k, v in encoded)


class QueryStringAuth(httpx.Auth):
    """
    Sends the consumer credentials as query parameters.

    Only safe over https: the secret ends up in the request URL, so it is
    selected by default for https stores.
    """

    def __init__(self, consumer_key: str, consumer_secret: str):
        self._consumer_key = consumer_key
        self._consumer_secret = consumer_secret

    def auth_flow(self, request: httpx.Request):
        credentials = encode_query({
            "consumer_key": self._consumer_key,
            "consumer_secret": self._consumer_secret,
        })
        query = request.url.query.decode("ascii")
        request.url = request.url.copy_with(
            query=(f"{query}&{credentials}" if query else credentials).encode("ascii")
        )
        yield request


class OAuth1Auth(httpx.Auth):
    """
    httpx.Auth implementation that signs requests with one-legged OAuth 1.0a.

    Every request gets its own timestamp and nonce, so a signature is only
    valid for the exact method and URL it was computed over. The token
    secret is always empty.
    """

    def __init__(self, consumer_key: str, consumer_secret: str):
        self._consumer_key = consumer_key
        self._consumer_secret = consumer_secret

    def _oauth_params(self) -> dict[str, str]:
        return {
            "oauth_consumer_key": self._consumer_key,
            "oauth_nonce": secrets.token_hex(16),
            "oauth_signature_method": SIGNATURE_METHOD,
            "oauth_timestamp": str(int(time.time())),
            "oauth_version": OAUTH_VERSION,
        }

    def signature_base_string(self, method: str, url: httpx.URL, oauth_params: dict[str, str]) -> str:
        return "&".join([
            method.upper(),
            _percent_encode(_base_string_uri(url)),
            _percent_encode(_normalized_parameters(url, oauth_params)),
        ])

    def sign(self, method: str, url: httpx.URL, oauth_params: dict[str, str]) -> str:
        key = f"{_percent_encode(self._consumer_secret)}&"
        base_string = self.signature_base_string(method, url, oauth_params)
        digest = hmac.new(key.encode("utf-8"), base_string.encode("utf-8"), hashlib.sha256).digest()
        return base64.b64encode(digest).decode("ascii")

    def auth_flow(self, request: httpx.Request):
        params = self._oauth_params()
        params["oauth_signature"] = self.sign(request.method, request.url, params)
        request.headers["Authorization"] = "OAuth " + ", ".join(
            f'{key}="{_percent_encode(value)}"' for key, value in sorted(params.items())
        )
        yield request


def build_auth(config: WooCommerceConfig) -> httpx.Auth:
    """Picks the authentication strategy for the store's transport."""
    if config.uses_query_string_auth:
        logger.debug("Using query string authentication for %s", config.base_url)
        return QueryStringAuth(config.consumer_key, config.consumer_secret)
    logger.debug("Using OAuth 1.0a signed requests for %s", config.base_url)
    return OAuth1Auth(config.consumer_key, config.consumer_secret)
