import os
from dataclasses import dataclass, field

from stockflow.clients.woocommerce.utils import normalize_url

DEFAULT_VERSION = "wc/v3"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class WooCommerceConfig:
    """ Configuration for the WooCommerce client. """
    url: str
    consumer_key: str
    consumer_secret: str = field(repr=False)
    version: str = DEFAULT_VERSION
    timeout: float = DEFAULT_TIMEOUT
    # None derives the mode from the URL scheme: https -> query string, http -> OAuth 1.0a.
    query_string_auth: bool | None = None

    def __post_init__(self):
        if not self.consumer_key or not self.consumer_secret:
            raise ValueError("consumer_key and consumer_secret are required")

    @property
    def base_url(self) -> str:
        return normalize_url(self.url)

    @property
    def api_url(self) -> str:
        return f"{self.base_url}/wp-json/{self.version.strip('/')}"

    @property
    def uses_query_string_auth(self) -> bool:
        if self.query_string_auth is not None:
            return self.query_string_auth
        return self.base_url.startswith("https://")


def _require_env(key: str) -> str:
    value = os.getenv(key)
    if value is None:
        raise ValueError(f"Missing required environment variable: {key}")
    return value


def _optional_bool_env(key: str) -> bool | None:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return None
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_woocommerce_config() -> WooCommerceConfig:
    """ Load WooCommerce configuration from environment variables. """
    return WooCommerceConfig(
        url=_require_env("WOOCOMMERCE_URL"),
        consumer_key=_require_env("WOOCOMMERCE_CONSUMER_KEY"),
        consumer_secret=_require_env("WOOCOMMERCE_CONSUMER_SECRET"),
        version=os.getenv("WOOCOMMERCE_API_VERSION", DEFAULT_VERSION),
        timeout=float(os.getenv("WOOCOMMERCE_TIMEOUT", DEFAULT_TIMEOUT)),
        query_string_auth=_optional_bool_env("WOOCOMMERCE_QUERY_STRING_AUTH"),
    )
