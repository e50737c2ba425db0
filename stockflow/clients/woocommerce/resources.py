from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from stockflow.clients.woocommerce.base import Page, WooCommerceClient
from stockflow.clients.woocommerce.batching import BatchConfig, submit_in_chunks
from stockflow.clients.woocommerce.pagination import DEFAULT_PER_PAGE, fetch_all


class ResourceClient:
    """CRUD + batch endpoints for a top-level collection such as `products` or `coupons`."""

    path = ""
    # Whether delete() bypasses the trash by default.
    force_delete = False

    def __init__(self, client: WooCommerceClient):
        self.client = client

    async def list(self, params: dict | None = None) -> list[dict]:
        return await self.client.get(self.path, params)

    async def list_page(self, params: dict | None = None) -> Page:
        return await self.client.list_page(self.path, params)

    async def get(self, resource_id: int) -> dict:
        return await self.client.get(f"{self.path}/{resource_id}")

    async def create(self, data: dict) -> dict:
        return await self.client.post(self.path, data)

    async def update(self, resource_id: int, data: dict) -> dict:
        return await self.client.put(f"{self.path}/{resource_id}", data)

    async def delete(self, resource_id: int, force: bool | None = None) -> dict:
        params = {"force": self.force_delete if force is None else force}
        return await self.client.delete(f"{self.path}/{resource_id}", params)

    async def batch(self, operations: dict) -> dict:
        """Sends create/update/delete lists in one call (max 100 objects in total)."""
        return await self.client.batch(f"{self.path}/batch", operations)


class NestedResourceClient:
    """Collections that live under a parent object, e.g. products/{id}/variations."""

    template = ""
    force_delete = False

    def __init__(self, client: WooCommerceClient):
        self.client = client

    def _path(self, parent_id: int) -> str:
        return self.template.format(parent_id=parent_id)

    async def list(self, parent_id: int, params: dict | None = None) -> list[dict]:
        return await self.client.get(self._path(parent_id), params)

    async def get(self, parent_id: int, resource_id: int) -> dict:
        return await self.client.get(f"{self._path(parent_id)}/{resource_id}")

    async def create(self, parent_id: int, data: dict) -> dict:
        return await self.client.post(self._path(parent_id), data)

    async def delete(self, parent_id: int, resource_id: int, force: bool | None = None) -> dict:
        params = {"force": self.force_delete if force is None else force}
        return await self.client.delete(f"{self._path(parent_id)}/{resource_id}", params)


class ProductsClient(ResourceClient):
    path = "products"

    def __init__(self, client: WooCommerceClient, batch_config: BatchConfig | None = None):
        super().__init__(client)
        self.batch_config = batch_config or BatchConfig()

    async def list_all(self, params: dict | None = None) -> list[dict]:
        """Every product matching `params`, following pages until a short one."""
        params = dict(params or {})
        per_page = params.pop("per_page", None) or DEFAULT_PER_PAGE

        async def fetch_page(page: int, size: int) -> list[dict]:
            return await self.list({**params, "per_page": size, "page": page})

        return await fetch_all(fetch_page, per_page)

    async def get_all(self, status: str = "publish", per_page: int = DEFAULT_PER_PAGE) -> list[dict]:
        return await self.list_all({"status": None if status == "any" else status, "per_page": per_page})

    async def batch_update(self, updates: Sequence[dict[str, Any]]) -> dict:
        """
        Sets stock quantities for many products, e.g. for a stock sync.

        Each update needs `id` and `stock_quantity`; stock management is
        switched on for every product sent. Splits into chunks the batch
        endpoint accepts and paces them per the batch config.
        """
        if not updates:
            return {"update": []}

        async def submit(chunk: list[dict[str, Any]]) -> list[dict]:
            response = await self.batch({
                "update": [
                    {"id": item["id"], "stock_quantity": item["stock_quantity"], "manage_stock": True}
                    for item in chunk
                ],
            })
            return response.get("update") or []

        return {"update": await submit_in_chunks(updates, submit, self.batch_config)}


class VariationsClient(NestedResourceClient):
    template = "products/{parent_id}/variations"

    async def update(self, product_id: int, variation_id: int, data: dict) -> dict:
        return await self.client.put(f"{self._path(product_id)}/{variation_id}", data)

    async def batch(self, product_id: int, operations: dict) -> dict:
        return await self.client.batch(f"{self._path(product_id)}/batch", operations)


class CategoriesClient(ResourceClient):
    path = "products/categories"


class TagsClient(ResourceClient):
    path = "products/tags"


class OrdersClient(ResourceClient):
    path = "orders"

    async def get_all(self, status: str | None = None, per_page: int = DEFAULT_PER_PAGE) -> list[dict]:
        async def fetch_page(page: int, size: int) -> list[dict]:
            return await self.list({"status": status, "per_page": size, "page": page})

        return await fetch_all(fetch_page, per_page)

    async def list_notes(self, order_id: int) -> list[dict]:
        return await self.client.get(f"orders/{order_id}/notes")

    async def get_note(self, order_id: int, note_id: int) -> dict:
        return await self.client.get(f"orders/{order_id}/notes/{note_id}")

    async def create_note(self, order_id: int, note: dict) -> dict:
        return await self.client.post(f"orders/{order_id}/notes", note)

    async def delete_note(self, order_id: int, note_id: int, force: bool = True) -> dict:
        return await self.client.delete(f"orders/{order_id}/notes/{note_id}", {"force": force})


class RefundsClient(NestedResourceClient):
    template = "orders/{parent_id}/refunds"
    force_delete = True


class CustomersClient(ResourceClient):
    path = "customers"

    async def delete(self, resource_id: int, force: bool | None = None, reassign: int | None = None) -> dict:
        # reassign hands the customer's orders to another user; None leaves it out of the query.
        params = {"force": bool(force), "reassign": reassign}
        return await self.client.delete(f"{self.path}/{resource_id}", params)

    async def list_downloads(self, customer_id: int) -> list[dict]:
        return await self.client.get(f"customers/{customer_id}/downloads")

    async def find_by_email(self, email: str) -> dict | None:
        customers = await self.list({"email": email, "per_page": 1})
        return customers[0] if customers else None


class CouponsClient(ResourceClient):
    path = "coupons"

    async def find_by_code(self, code: str) -> dict | None:
        coupons = await self.list({"code": code, "per_page": 1})
        return coupons[0] if coupons else None


class WebhooksClient(ResourceClient):
    path = "webhooks"
    force_delete = True

    async def list_deliveries(self, webhook_id: int) -> list[dict]:
        return await self.client.get(f"webhooks/{webhook_id}/deliveries")

    async def get_delivery(self, webhook_id: int, delivery_id: int) -> dict:
        return await self.client.get(f"webhooks/{webhook_id}/deliveries/{delivery_id}")
