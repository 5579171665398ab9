import logging
from typing import Any

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx answer from the storefront API."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _detail(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    detail = body.get("detail") if isinstance(body, dict) else body
    if isinstance(detail, list):
        # FastAPI validation errors
        return "; ".join(str(d.get("msg", d)) if isinstance(d, dict) else str(d) for d in detail)
    return str(detail)


class StorefrontClient:
    """Async client for the endpoints the admin panel calls."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ):
        self._http = httpx.AsyncClient(
            base_url=base_url or settings.STOREFRONT_API_URL,
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> "StorefrontClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, json: Any = None, params: dict | None = None) -> Any:
        resp = await self._http.request(method, path, json=json, params=params)
        if resp.status_code >= 400:
            message = _detail(resp)
            logger.debug("%s %s -> %s %s", method, path, resp.status_code, message)
            raise ApiError(resp.status_code, message)
        if not resp.content:
            return None
        return resp.json()

    # ---------- Products ----------

    async def list_products(self, admin: bool = True) -> list[dict]:
        return await self._request("GET", "/api/products", params={"admin": admin})

    async def get_product(self, product_id: int) -> dict:
        return await self._request("GET", f"/api/products/{product_id}")

    async def create_product(self, payload: dict) -> dict:
        return await self._request("POST", "/api/products", json=payload)

    async def update_product(self, product_id: int, payload: dict) -> dict:
        return await self._request("PUT", f"/api/products/{product_id}", json=payload)

    async def delete_product(self, product_id: int) -> None:
        await self._request("DELETE", f"/api/products/{product_id}")

    async def recalculate_price(self, product_id: int) -> dict:
        return await self._request("POST", f"/api/products/{product_id}/recalculate-price", json={})

    async def recalculate_all_prices(self) -> dict:
        return await self._request("POST", "/api/products/recalculate-all-prices", json={})

    # ---------- Images ----------

    async def list_images(self, product_id: int) -> list[dict]:
        return await self._request("GET", f"/api/products/{product_id}/images")

    async def add_image(self, product_id: int, payload: dict) -> dict:
        return await self._request("POST", f"/api/products/{product_id}/images", json=payload)

    async def delete_image(self, product_id: int, image_id: int) -> None:
        await self._request("DELETE", f"/api/products/{product_id}/images/{image_id}")

    async def set_main_image(self, product_id: int, image_id: int) -> dict:
        return await self._request("PUT", f"/api/products/{product_id}/main-image/{image_id}")

    # ---------- Attributes ----------

    async def create_attribute(self, payload: dict) -> dict:
        return await self._request("POST", "/api/product-attributes", json=payload)

    async def delete_product_attributes(self, product_id: int) -> None:
        await self._request("DELETE", f"/api/products/{product_id}/attributes")

    # ---------- Categories ----------

    async def list_categories(self) -> list[dict]:
        return await self._request("GET", "/api/categories")

    async def create_category(self, payload: dict) -> dict:
        return await self._request("POST", "/api/categories", json=payload)

    async def delete_category(self, category_id: int) -> None:
        await self._request("DELETE", f"/api/categories/{category_id}")

    # ---------- Banners ----------

    async def create_banner(self, payload: dict) -> dict:
        return await self._request("POST", "/api/banners", json=payload)

    async def update_banner(self, banner_id: int, payload: dict) -> dict:
        return await self._request("PUT", f"/api/banners/{banner_id}", json=payload)

    async def activate_banner(self, banner_id: int) -> dict:
        return await self._request("PUT", f"/api/banners/{banner_id}/activate")

    # ---------- Delivery zones ----------

    async def create_delivery_zone(self, payload: dict) -> dict:
        return await self._request("POST", "/api/delivery-zones", json=payload)

    async def update_delivery_zone(self, zone_id: int, payload: dict) -> dict:
        return await self._request("PUT", f"/api/delivery-zones/{zone_id}", json=payload)

    # ---------- Orders ----------

    async def list_orders(self, status: str | None = None) -> list[dict]:
        params = {"status": status} if status else None
        return await self._request("GET", "/api/orders", params=params)

    async def order_summary(self) -> dict:
        return await self._request("GET", "/api/orders/summary")

    async def update_order_status(self, order_id: int, status: str) -> dict:
        return await self._request("PUT", f"/api/orders/{order_id}/status", json={"status": status})

    async def update_payment_status(self, order_id: int, payment_status: str) -> dict:
        return await self._request(
            "PUT", f"/api/orders/{order_id}/payment-status", json={"paymentStatus": payment_status}
        )

    async def delete_order(self, order_id: int) -> None:
        await self._request("DELETE", f"/api/orders/{order_id}")

    # ---------- Inventory ----------

    async def list_inventory(self, q: str | None = None, stock: str = "all") -> list[dict]:
        params = {"stock": stock}
        if q:
            params["q"] = q
        return await self._request("GET", "/api/inventory", params=params)

    async def create_inventory_item(self, payload: dict) -> dict:
        return await self._request("POST", "/api/inventory", json=payload)

    async def update_inventory_item(self, item_id: int, payload: dict) -> dict:
        return await self._request("PUT", f"/api/inventory/{item_id}", json=payload)

    async def restock(self, item_id: int, quantity: int) -> dict:
        return await self._request("POST", f"/api/inventory/{item_id}/restock", json={"quantity": quantity})

    async def delete_inventory_item(self, item_id: int) -> None:
        await self._request("DELETE", f"/api/inventory/{item_id}")
