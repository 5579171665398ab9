"""
Admin panel operations. Each one performs its requests and answers with the
Toast to show; request errors never escape to the caller and are never
retried.
"""
import logging

import httpx

from app.admin import notifications
from app.admin.client import ApiError, StorefrontClient
from app.admin.drafts import BannerDraft, DeliveryZoneDraft, DraftValidationError, InventoryDraft, ProductDraft
from app.admin.notifications import Toast
from app.admin.saga import (
    SaveOutcome,
    SaveResult,
    save_banner,
    save_delivery_zone,
    save_inventory_item,
    save_product,
)

logger = logging.getLogger(__name__)

REQUEST_ERRORS = (ApiError, httpx.HTTPError)


def _missing(exc: DraftValidationError) -> Toast:
    return notifications.failure("Required fields", str(exc))


async def submit_product(client: StorefrontClient, draft: ProductDraft) -> tuple[SaveResult | None, Toast]:
    try:
        result = await save_product(client, draft)
    except DraftValidationError as e:
        return None, _missing(e)

    if result.outcome == SaveOutcome.FAILED:
        return result, notifications.failure("Error saving product")
    if result.outcome == SaveOutcome.PARTIAL:
        steps = ", ".join(result.failed_steps) or "some steps"
        return result, notifications.failure(
            "Product saved with errors",
            f"The product was saved but {steps} did not complete. " + notifications.TRY_AGAIN,
        )
    title = "Product created!" if draft.is_new else "Product updated!"
    return result, notifications.success(title, "Your changes were saved.")


async def submit_banner(client: StorefrontClient, draft: BannerDraft) -> Toast:
    try:
        await save_banner(client, draft)
    except DraftValidationError as e:
        return _missing(e)
    except REQUEST_ERRORS as e:
        logger.warning("banner save failed: %s", e)
        return notifications.failure("Error saving banner")
    title = "Banner created!" if draft.is_new else "Banner updated!"
    return notifications.success(title, "Your changes were saved.")


async def submit_delivery_zone(client: StorefrontClient, draft: DeliveryZoneDraft) -> Toast:
    try:
        await save_delivery_zone(client, draft)
    except DraftValidationError as e:
        return _missing(e)
    except REQUEST_ERRORS as e:
        logger.warning("delivery zone save failed: %s", e)
        return notifications.failure("Error saving delivery zone")
    title = "Delivery zone created!" if draft.is_new else "Delivery zone updated!"
    return notifications.success(title, "Your changes were saved.")


async def recalculate_product_price(client: StorefrontClient, product_id: int, name: str = "") -> Toast:
    try:
        data = await client.recalculate_price(product_id)
    except REQUEST_ERRORS as e:
        logger.warning("price recalculation failed for product %s: %s", product_id, e)
        return notifications.failure("Error recalculating price")
    label = name or f"Product {product_id}"
    return notifications.success("Price recalculated!", f"{label}: {data['formattedPrice']}")


async def recalculate_all_prices(client: StorefrontClient) -> Toast:
    try:
        data = await client.recalculate_all_prices()
    except REQUEST_ERRORS as e:
        logger.warning("bulk price recalculation failed: %s", e)
        return notifications.failure("Error recalculating prices")
    description = f"{data['updated']} product(s) updated"
    if data["failed"]:
        description += f", {data['failed']} failed"
    return notifications.success("Prices recalculated!", description + ".")


async def delete_category(client: StorefrontClient, category_id: int) -> Toast:
    try:
        await client.delete_category(category_id)
    except REQUEST_ERRORS as e:
        logger.warning("category %s delete failed: %s", category_id, e)
        return notifications.category_delete_failure(e)
    return notifications.success("Category removed!", "The category was removed.")


async def delete_product(client: StorefrontClient, product_id: int) -> Toast:
    try:
        await client.delete_product(product_id)
    except REQUEST_ERRORS as e:
        logger.warning("product %s delete failed: %s", product_id, e)
        return notifications.failure("Error removing product")
    return notifications.success("Product removed!", "The product was removed.")


async def activate_banner(client: StorefrontClient, banner_id: int) -> Toast:
    try:
        await client.activate_banner(banner_id)
    except REQUEST_ERRORS as e:
        logger.warning("banner %s activation failed: %s", banner_id, e)
        return notifications.failure("Error activating banner")
    return notifications.success("Banner activated!", "The banner is now live on the site.")


# ---------- Orders ----------

def next_payment_status(current: str) -> str:
    """The payment button toggles between paid and pending."""
    return "pending" if current == "paid" else "paid"


async def update_order_status(client: StorefrontClient, order_id: int, status: str) -> Toast:
    try:
        await client.update_order_status(order_id, status)
    except REQUEST_ERRORS as e:
        logger.warning("order %s status update failed: %s", order_id, e)
        return notifications.failure("Error updating status")
    return notifications.success("Status updated!", "The order status was updated.")


async def toggle_payment_status(client: StorefrontClient, order: dict) -> Toast:
    target = next_payment_status(order.get("paymentStatus", "pending"))
    try:
        await client.update_payment_status(order["id"], target)
    except REQUEST_ERRORS as e:
        logger.warning("order %s payment update failed: %s", order["id"], e)
        return notifications.failure("Error updating payment")
    return notifications.success("Payment status updated!", "The payment status was updated.")


async def delete_order(client: StorefrontClient, order_id: int) -> Toast:
    try:
        await client.delete_order(order_id)
    except REQUEST_ERRORS as e:
        logger.warning("order %s delete failed: %s", order_id, e)
        return notifications.failure("Error deleting order")
    return notifications.success("Order deleted!", "The order was deleted.")


# ---------- Inventory ----------

async def submit_inventory_item(client: StorefrontClient, draft: InventoryDraft) -> Toast:
    try:
        await save_inventory_item(client, draft)
    except DraftValidationError as e:
        return _missing(e)
    except REQUEST_ERRORS as e:
        logger.warning("inventory item save failed: %s", e)
        return notifications.failure("Error saving item")
    title = "Item created!" if draft.is_new else "Item updated!"
    return notifications.success(title, "Your changes were saved.")


async def restock_item(client: StorefrontClient, item_id: int, quantity: int) -> Toast:
    try:
        item = await client.restock(item_id, quantity)
    except REQUEST_ERRORS as e:
        logger.warning("inventory item %s restock failed: %s", item_id, e)
        return notifications.failure("Error restocking item")
    return notifications.success("Stock replenished!", f"{item['productName']}: {item['currentStock']} in stock.")


async def delete_inventory_item(client: StorefrontClient, item_id: int) -> Toast:
    try:
        await client.delete_inventory_item(item_id)
    except REQUEST_ERRORS as e:
        logger.warning("inventory item %s delete failed: %s", item_id, e)
        return notifications.failure("Error removing item")
    return notifications.success("Item removed!", "The item was removed.")
