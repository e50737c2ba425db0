import httpx

from stockflow.clients.http import HttpClient
from stockflow.clients.woocommerce.auth import build_auth
from stockflow.clients.woocommerce.base import WooCommerceClient
from stockflow.clients.woocommerce.batching import BatchConfig
from stockflow.clients.woocommerce.client import WooCommerce
from stockflow.clients.woocommerce.config import WooCommerceConfig, load_woocommerce_config


def build_woocommerce(
    config: WooCommerceConfig,
    batch_config: BatchConfig | None = None,
    client: httpx.AsyncClient | None = None,
) -> WooCommerce:
    """
    Wires all WooCommerce dependencies together and returns a ready-to-use facade.

    `client` lets callers (and tests) supply their own httpx.AsyncClient,
    e.g. one with a custom transport, without touching internal wiring.
    """
    auth = build_auth(config)
    http = HttpClient(config.api_url, client=client, timeout=config.timeout)
    return WooCommerce(WooCommerceClient(auth, http), batch_config)


def create_woocommerce(batch_config: BatchConfig | None = None) -> WooCommerce:
    """
    Convenience function that loads config from environment variables
    and returns a ready-to-use WooCommerce facade.

    Raises ValueError if any required environment variable is missing.
    """
    config = load_woocommerce_config()
    return build_woocommerce(config, batch_config=batch_config or BatchConfig.from_env())
