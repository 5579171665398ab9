import logging
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import NotFoundError, PricingError, StorefrontError
from app.models.product import Product

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def format_price(value) -> str:
    amount = Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)
    return f"{settings.CURRENCY_SYMBOL} {amount}"


def calculate_total(product: Product) -> Decimal:
    """Base price plus the modifiers of every active attribute, in cents."""
    if product.base_price is None:
        raise PricingError(f"Product {product.id} has no base price")

    total = Decimal(product.base_price)
    for attr in product.attributes:
        if attr.is_active:
            total += Decimal(attr.price_modifier or 0)
    total = total.quantize(CENTS, rounding=ROUND_HALF_UP)

    if total < 0:
        raise PricingError(f"Product {product.id} would have a negative price ({total})")
    return total


def recalculate_price(db: Session, product_id: int) -> dict:
    product = db.get(Product, product_id)
    if not product:
        raise NotFoundError(f"Product {product_id} not found")

    total = calculate_total(product)
    previous = product.price
    product.price = total
    db.commit()

    logger.info("product %s price %s -> %s", product_id, previous, total)
    return {"total_price": float(total), "formatted_price": format_price(total)}


def recalculate_all_prices(db: Session) -> dict:
    """
    Recalculate every product. A product that cannot be priced is recorded
    as a failure and the batch goes on with the rest.
    """
    updated = 0
    failures = []

    for product in db.query(Product).order_by(Product.id).all():
        try:
            product.price = calculate_total(product)
            updated += 1
        except (StorefrontError, ArithmeticError) as e:
            logger.warning("price recalculation failed for product %s: %s", product.id, e)
            failures.append({"product_id": product.id, "error": str(e)})

    db.commit()
    logger.info("bulk price recalculation: %s updated, %s failed", updated, len(failures))
    return {"updated": updated, "failed": len(failures), "failures": failures}
