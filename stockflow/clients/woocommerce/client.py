from stockflow.clients.woocommerce.base import WooCommerceClient
from stockflow.clients.woocommerce.batching import BatchConfig
from stockflow.clients.woocommerce.resources import (
    CategoriesClient,
    CouponsClient,
    CustomersClient,
    OrdersClient,
    ProductsClient,
    RefundsClient,
    TagsClient,
    VariationsClient,
    WebhooksClient,
)


class WooCommerce:
    """
    Entry point to every WooCommerce resource.

    All resource clients share one WooCommerceClient, so one configuration,
    one auth strategy and one connection pool serve the whole store.
    """

    def __init__(self, client: WooCommerceClient, batch_config: BatchConfig | None = None):
        self.client = client
        self.products = ProductsClient(client, batch_config)
        self.variations = VariationsClient(client)
        self.categories = CategoriesClient(client)
        self.tags = TagsClient(client)
        self.orders = OrdersClient(client)
        self.refunds = RefundsClient(client)
        self.customers = CustomersClient(client)
        self.coupons = CouponsClient(client)
        self.webhooks = WebhooksClient(client)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "WooCommerce":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
