import logging
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, StorefrontError
from app.models.delivery_zone import DeliveryZone
from app.models.order import Order, OrderItem
from app.models.product import Product
from app.schemas.order import OrderIn
from app.services.pricing import CENTS
from app.services.store import get_store_settings

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def list_orders(db: Session, status: str | None = None) -> list[Order]:
    stmt = db.query(Order)
    if status:
        stmt = stmt.filter(Order.order_status == status)
    return stmt.order_by(Order.created_at.desc(), Order.id.desc()).all()


def get_order(db: Session, order_id: int) -> Order:
    order = db.get(Order, order_id)
    if not order:
        raise NotFoundError(f"Order {order_id} not found")
    return order


def _delivery_fee(db: Session, neighborhood: str) -> Decimal:
    zone = (
        db.query(DeliveryZone)
        .filter(func.lower(DeliveryZone.neighborhood_name) == neighborhood.strip().lower())
        .filter(DeliveryZone.is_active == True)  # noqa: E712
        .first()
    )
    if not zone:
        raise StorefrontError(f"No delivery to {neighborhood.strip()}")
    return Decimal(zone.delivery_fee)


def _next_order_number(db: Session) -> str:
    last = db.query(func.max(Order.id)).scalar() or 0
    return f"{last + 1:05d}"


def create_order(db: Session, data: OrderIn) -> Order:
    """
    Record an order placed on the storefront. Prices come from the catalog,
    never from the request; the delivery fee from the customer's zone.
    """
    store = get_store_settings(db)
    if not store.is_open:
        raise StorefrontError("The store is closed")

    items = []
    for line in data.items:
        product = db.get(Product, line.product_id)
        if not product or not product.is_available:
            raise StorefrontError(f"Product {line.product_id} is not available")
        unit = Decimal(product.price)
        items.append(
            OrderItem(
                product_id=product.id,
                product_name=product.name,
                quantity=line.quantity,
                unit_price=unit,
                total_price=(unit * line.quantity).quantize(CENTS),
            )
        )

    subtotal = sum((item.total_price for item in items), Decimal("0.00"))
    if subtotal < Decimal(store.minimum_order or 0):
        raise StorefrontError(f"Minimum order is {store.minimum_order}")
    fee = _delivery_fee(db, data.neighborhood)

    order = Order(
        order_number=_next_order_number(db),
        customer_name=data.customer_name.strip(),
        customer_phone=data.customer_phone.strip(),
        street_name=data.street_name.strip(),
        house_number=data.house_number.strip(),
        neighborhood=data.neighborhood.strip(),
        payment_method=data.payment_method,
        notes=data.notes,
        subtotal=subtotal,
        delivery_fee=fee,
        total=subtotal + fee,
        items=items,
    )
    db.add(order)
    db.commit()
    db.refresh(order)
    logger.info("order %s placed: %s item(s), total %s", order.order_number, len(items), order.total)
    return order


def update_order_status(db: Session, order_id: int, status: str) -> Order:
    order = get_order(db, order_id)
    previous = order.order_status
    order.order_status = status
    order.updated_at = _now()
    db.commit()
    db.refresh(order)
    logger.info("order %s status %s -> %s", order.order_number, previous, status)
    return order


def update_payment_status(db: Session, order_id: int, payment_status: str) -> Order:
    order = get_order(db, order_id)
    order.payment_status = payment_status
    order.updated_at = _now()
    db.commit()
    db.refresh(order)
    logger.info("order %s payment %s", order.order_number, payment_status)
    return order


def delete_order(db: Session, order_id: int) -> None:
    order = get_order(db, order_id)
    db.delete(order)
    db.commit()
    logger.info("deleted order %s", order.order_number)


def order_summary(db: Session, today: date | None = None) -> dict:
    """Dashboard figures. Revenue only counts paid orders."""
    today = today or _now().date()
    todays = [o for o in db.query(Order).all() if o.created_at and o.created_at.date() == today]
    preparing = db.query(Order).filter(Order.order_status == "preparing").count()
    revenue = sum((Decimal(o.total) for o in todays if o.payment_status == "paid"), Decimal("0.00"))
    return {"orders_today": len(todays), "preparing": preparing, "revenue_today": revenue}
