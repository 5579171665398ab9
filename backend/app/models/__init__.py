from app.models.category import Category
from app.models.product import Product, ProductImage, ProductAttribute
from app.models.banner import Banner
from app.models.delivery_zone import DeliveryZone
from app.models.store_settings import StoreSettings
from app.models.order import Order, OrderItem
from app.models.inventory import InventoryItem

__all__ = [
    "Category",
    "Product",
    "ProductImage",
    "ProductAttribute",
    "Banner",
    "DeliveryZone",
    "StoreSettings",
    "Order",
    "OrderItem",
    "InventoryItem",
]
