import logging
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError, StorefrontError
from app.models.inventory import InventoryItem
from app.models.product import Product
from app.schemas.inventory import InventoryItemIn, InventoryItemUpdate

logger = logging.getLogger(__name__)


def list_inventory(db: Session, q: str | None = None, stock: str = "all") -> list[InventoryItem]:
    stmt = db.query(InventoryItem).outerjoin(Product, InventoryItem.product_id == Product.id)

    if q:
        like = f"%{q.strip()}%"
        stmt = stmt.filter(or_(Product.name.ilike(like), InventoryItem.supplier.ilike(like)))
    # "low" includes empty items, as the dashboard counts them
    if stock == "low":
        stmt = stmt.filter(InventoryItem.current_stock <= InventoryItem.min_stock)
    elif stock == "out":
        stmt = stmt.filter(InventoryItem.current_stock == 0)
    elif stock == "normal":
        stmt = stmt.filter(InventoryItem.current_stock > InventoryItem.min_stock)

    return stmt.order_by(InventoryItem.id).all()


def get_inventory_item(db: Session, item_id: int) -> InventoryItem:
    item = db.get(InventoryItem, item_id)
    if not item:
        raise NotFoundError(f"Inventory item {item_id} not found")
    return item


def _check_levels(item: InventoryItem) -> None:
    if item.min_stock > item.max_stock:
        raise StorefrontError("minStock cannot exceed maxStock")
    if item.reorder_point > item.max_stock:
        raise StorefrontError("reorderPoint cannot exceed maxStock")


def create_inventory_item(db: Session, data: InventoryItemIn) -> InventoryItem:
    if not db.get(Product, data.product_id):
        raise NotFoundError(f"Product {data.product_id} not found")
    if db.query(InventoryItem).filter(InventoryItem.product_id == data.product_id).first():
        raise ConflictError(f"Product {data.product_id} already has an inventory item")

    item = InventoryItem(**data.model_dump())
    _check_levels(item)
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def update_inventory_item(db: Session, item_id: int, data: InventoryItemUpdate) -> InventoryItem:
    item = get_inventory_item(db, item_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field not in ("supplier", "location", "notes"):
            continue
        setattr(item, field, value)
    _check_levels(item)
    db.commit()
    db.refresh(item)
    return item


def restock(db: Session, item_id: int, quantity: int) -> InventoryItem:
    item = get_inventory_item(db, item_id)
    item.current_stock += quantity
    item.last_restocked = datetime.now(timezone.utc)
    if item.current_stock > item.max_stock:
        logger.warning("inventory item %s above max stock: %s > %s", item_id, item.current_stock, item.max_stock)
    db.commit()
    db.refresh(item)
    return item


def delete_inventory_item(db: Session, item_id: int) -> None:
    db.delete(get_inventory_item(db, item_id))
    db.commit()


def inventory_summary(db: Session) -> dict:
    items = db.query(InventoryItem).all()
    return {
        "total_items": len(items),
        "low_stock": sum(1 for i in items if i.current_stock <= i.min_stock),
        "out_of_stock": sum(1 for i in items if i.current_stock == 0),
        "total_value": sum((i.current_stock * Decimal(i.cost_per_unit) for i in items), Decimal("0.00")),
    }
