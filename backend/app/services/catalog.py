import logging
import re

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError, StorefrontError
from app.models.category import Category
from app.models.product import Product, ProductAttribute, ProductImage
from app.schemas.category import CategoryIn, CategoryUpdate
from app.schemas.product import ProductAttributeIn, ProductImageIn, ProductIn, ProductUpdate
from app.services.alt_text import generate_alt_text

logger = logging.getLogger(__name__)

CATEGORY_HAS_PRODUCTS = "Cannot delete category with existing products"


# -------------------------
# Categories
# -------------------------

def slugify(name: str) -> str:
    slug = re.sub(r"\s+", "-", (name or "").strip().lower())
    return re.sub(r"[^a-z0-9-]", "", slug)


def list_categories(db: Session) -> list[Category]:
    return db.query(Category).order_by(Category.display_order, Category.name).all()


def get_category(db: Session, category_id: int) -> Category:
    category = db.get(Category, category_id)
    if not category:
        raise NotFoundError(f"Category {category_id} not found")
    return category


def _ensure_unique_slug(db: Session, slug: str, category_id: int | None = None) -> None:
    if not slug:
        raise StorefrontError("Category slug cannot be empty")
    existing = db.query(Category).filter(Category.slug == slug).first()
    if existing and existing.id != category_id:
        raise ConflictError(f"Category slug '{slug}' is already in use")


def create_category(db: Session, data: CategoryIn) -> Category:
    slug = data.slug.strip() or slugify(data.name)
    _ensure_unique_slug(db, slug)

    category = Category(
        name=data.name.strip(),
        slug=slug,
        icon=data.icon,
        display_order=data.display_order,
    )
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def update_category(db: Session, category_id: int, data: CategoryUpdate) -> Category:
    category = get_category(db, category_id)
    changes = data.model_dump(exclude_unset=True)

    if "slug" in changes:
        changes["slug"] = (changes["slug"] or "").strip() or slugify(changes.get("name") or category.name)
        _ensure_unique_slug(db, changes["slug"], category.id)

    for field, value in changes.items():
        setattr(category, field, value)
    db.commit()
    db.refresh(category)
    return category


def delete_category(db: Session, category_id: int) -> None:
    category = get_category(db, category_id)
    in_use = db.query(Product.id).filter(Product.category_id == category_id).count()
    if in_use:
        logger.info("refusing to delete category %s: %s product(s) attached", category_id, in_use)
        raise ConflictError(CATEGORY_HAS_PRODUCTS)
    db.delete(category)
    db.commit()


# -------------------------
# Products
# -------------------------

def list_products(
    db: Session,
    category_id: int | None = None,
    featured: bool | None = None,
    q: str | None = None,
    include_unavailable: bool = False,
) -> list[Product]:
    stmt = db.query(Product)

    if not include_unavailable:
        stmt = stmt.filter(Product.is_available == True)  # noqa: E712
    if category_id is not None:
        stmt = stmt.filter(Product.category_id == category_id)
    if featured is not None:
        stmt = stmt.filter(Product.is_featured == featured)
    if q:
        like = f"%{q.strip()}%"
        stmt = stmt.filter(or_(Product.name.ilike(like), Product.description.ilike(like)))

    return stmt.order_by(Product.id).all()


def get_product(db: Session, product_id: int) -> Product:
    product = db.get(Product, product_id)
    if not product:
        raise NotFoundError(f"Product {product_id} not found")
    return product


def _check_category(db: Session, category_id: int) -> None:
    if not db.get(Category, category_id):
        raise StorefrontError(f"Unknown category {category_id}")


def create_product(db: Session, data: ProductIn) -> Product:
    _check_category(db, data.category_id)

    product = Product(
        name=data.name.strip(),
        description=data.description,
        price=data.price,
        base_price=data.price,
        original_price=data.original_price,
        category_id=data.category_id,
        image_url=data.image_url,
        is_available=data.is_available,
        is_featured=data.is_featured,
        is_promotion=data.is_promotion,
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    logger.info("created product %s (%s)", product.id, product.name)
    return product


def update_product(db: Session, product_id: int, data: ProductUpdate) -> Product:
    product = get_product(db, product_id)
    changes = data.model_dump(exclude_unset=True)

    if changes.get("category_id") is not None:
        _check_category(db, changes["category_id"])
    if changes.get("price") is not None:
        # an edited price is a new base; modifiers are applied on recalculation
        changes["base_price"] = changes["price"]

    for field, value in changes.items():
        if value is None and field not in ("original_price",):
            continue
        setattr(product, field, value)

    db.commit()
    db.refresh(product)
    return product


def delete_product(db: Session, product_id: int) -> None:
    product = get_product(db, product_id)
    db.delete(product)
    db.commit()
    logger.info("deleted product %s", product_id)


# -------------------------
# Product images
# -------------------------

def _promote(product: Product, image: ProductImage) -> None:
    for img in product.images:
        img.is_main = img is image
    product.image_url = image.image_url


def _renumber(product: Product) -> list[ProductImage]:
    ordered = sorted(product.images, key=lambda img: (img.display_order, img.id or 0))
    for position, img in enumerate(ordered):
        img.display_order = position
    return ordered


def list_product_images(db: Session, product_id: int) -> list[ProductImage]:
    product = get_product(db, product_id)
    return sorted(product.images, key=lambda img: (img.display_order, img.id))


def add_product_image(db: Session, product_id: int, data: ProductImageIn) -> ProductImage:
    product = get_product(db, product_id)
    url = data.image_url.strip()

    if any(img.image_url == url for img in product.images):
        raise ConflictError("Image already added to this product")

    position = len(product.images)
    alt_text = (data.alt_text or "").strip() or generate_alt_text(
        product.name,
        product.category.name if product.category else None,
        position + 1,
    )
    image = ProductImage(
        image_url=url,
        display_order=position,
        is_main=False,
        alt_text=alt_text,
    )
    product.images.append(image)

    # first image of a gallery is its main image
    if data.is_main or position == 0:
        _promote(product, image)

    db.commit()
    db.refresh(image)
    return image


def set_main_image(db: Session, product_id: int, image_id: int) -> ProductImage:
    product = get_product(db, product_id)
    image = db.get(ProductImage, image_id)
    if not image or image.product_id != product.id:
        raise NotFoundError(f"Image {image_id} not found for product {product_id}")

    _promote(product, image)
    db.commit()
    db.refresh(image)
    return image


def delete_product_image(db: Session, product_id: int, image_id: int) -> None:
    product = get_product(db, product_id)
    image = db.get(ProductImage, image_id)
    if not image or image.product_id != product.id:
        raise NotFoundError(f"Image {image_id} not found for product {product_id}")

    was_main = image.is_main
    product.images.remove(image)
    remaining = _renumber(product)
    if was_main and remaining:
        _promote(product, remaining[0])
    db.commit()


def clear_product_images(db: Session, product_id: int) -> int:
    product = get_product(db, product_id)
    count = len(product.images)
    product.images.clear()
    db.commit()
    return count


# -------------------------
# Product attributes
# -------------------------

def list_attributes(db: Session, product_id: int | None = None) -> list[ProductAttribute]:
    stmt = db.query(ProductAttribute)
    if product_id is not None:
        stmt = stmt.filter(ProductAttribute.product_id == product_id)
    return stmt.order_by(ProductAttribute.id).all()


def create_attribute(db: Session, data: ProductAttributeIn) -> ProductAttribute:
    get_product(db, data.product_id)

    attribute = ProductAttribute(
        product_id=data.product_id,
        attribute_name=data.attribute_name.strip(),
        attribute_value=data.attribute_value.strip(),
        price_modifier=data.price_modifier,
        is_active=data.is_active,
    )
    db.add(attribute)
    db.commit()
    db.refresh(attribute)
    return attribute


def delete_attribute(db: Session, attribute_id: int) -> None:
    attribute = db.get(ProductAttribute, attribute_id)
    if not attribute:
        raise NotFoundError(f"Attribute {attribute_id} not found")
    db.delete(attribute)
    db.commit()


def delete_product_attributes(db: Session, product_id: int) -> int:
    product = get_product(db, product_id)
    count = len(product.attributes)
    product.attributes.clear()
    db.commit()
    return count
