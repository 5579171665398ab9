from decimal import Decimal

from sqlalchemy.orm import Session

from app.core.db import Base, engine, SessionLocal
from app.models.banner import Banner
from app.models.category import Category
from app.models.delivery_zone import DeliveryZone
from app.models.inventory import InventoryItem
from app.models.order import Order, OrderItem
from app.models.product import Product, ProductAttribute, ProductImage
from app.models.store_settings import StoreSettings
from app.services.pricing import calculate_total


def reset_db(db: Session):
    # Drops & recreates all tables
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


def seed_categories(db: Session) -> dict[str, Category]:
    categories = [
        Category(name="Smartphones", slug="smartphones", icon="smartphone", display_order=1),
        Category(name="Computers", slug="computers", icon="laptop", display_order=2),
        Category(name="Accessories", slug="accessories", icon="headphones", display_order=3),
        Category(name="Tablets", slug="tablets", icon="tablet", display_order=4),
        Category(name="Smartwatches", slug="smartwatches", icon="watch", display_order=5),
    ]
    db.add_all(categories)
    db.flush()
    return {c.slug: c for c in categories}


def _product(category: Category, name: str, description: str, price: str, image_url: str, **flags) -> Product:
    return Product(
        name=name,
        description=description,
        price=Decimal(price),
        base_price=Decimal(price),
        category_id=category.id,
        image_url=image_url,
        images=[ProductImage(image_url=image_url, display_order=0, is_main=True, alt_text=f"{name} - image 1")],
        **flags,
    )


def seed_products(db: Session, categories: dict[str, Category]):
    phones = categories["smartphones"]
    computers = categories["computers"]
    accessories = categories["accessories"]
    tablets = categories["tablets"]
    watches = categories["smartwatches"]

    iphone = _product(
        phones,
        "iPhone 15 Pro 128GB",
        "Apple iPhone 15 Pro 128GB, 48MP Pro camera, A17 Pro chip, 6.1-inch Super Retina XDR display.",
        "8999.00",
        "https://images.unsplash.com/photo-1592750475338-74b7b21085ab?w=400",
        is_featured=True,
    )
    iphone.images.append(
        ProductImage(
            image_url="https://images.unsplash.com/photo-1695048133142-1a20484d2569?w=400",
            display_order=1,
            is_main=False,
            alt_text="iPhone 15 Pro 128GB - image 2",
        )
    )
    iphone.attributes = [
        ProductAttribute(attribute_name="Storage", attribute_value="256GB", price_modifier=Decimal("1000.00")),
        ProductAttribute(attribute_name="Color", attribute_value="Natural Titanium", price_modifier=Decimal("0.00")),
        ProductAttribute(
            attribute_name="Trade-in",
            attribute_value="Old device",
            price_modifier=Decimal("-500.00"),
            is_active=False,
        ),
    ]

    products = [
        iphone,
        _product(
            phones,
            "Samsung Galaxy S24 Ultra",
            "Samsung Galaxy S24 Ultra 256GB, 200MP camera, built-in S Pen, 6.8-inch Dynamic AMOLED display.",
            "7199.00",
            "https://images.unsplash.com/photo-1511707171634-5f897ff02aa9?w=400",
            is_featured=True,
        ),
        _product(
            phones,
            "Google Pixel 8 Pro",
            "Google Pixel 8 Pro 128GB, Google Tensor G3 chip, AI photography.",
            "5499.00",
            "https://images.unsplash.com/photo-1603921326210-6edd2d60ca68?w=400",
        ),
        _product(
            computers,
            'MacBook Air M3 13"',
            'Apple MacBook Air 13" with M3 chip, 8GB RAM, 256GB SSD, Liquid Retina display.',
            "9999.00",
            "https://images.unsplash.com/photo-1496181133206-80ce9b88a853?w=400",
        ),
        _product(
            computers,
            "Dell XPS 13 Plus",
            "Dell XPS 13 Plus, Intel Core i7, 16GB RAM, 512GB SSD, 4K OLED touch display.",
            "8499.00",
            "https://images.unsplash.com/photo-1588872657578-7efd1f1555ed?w=400",
        ),
        _product(
            accessories,
            "Sony WH-1000XM5",
            "Sony WH-1000XM5 headphones with industry-leading noise cancelling.",
            "1899.00",
            "https://images.unsplash.com/photo-1484704849700-f032a568e944?w=400",
            is_promotion=True,
            original_price=Decimal("2199.00"),
        ),
        _product(
            accessories,
            "Wireless Charger 15W",
            "Universal 15W wireless charger, works with iPhone and Android.",
            "149.90",
            "https://images.unsplash.com/photo-1586816879360-004f5b0c51e3?w=400",
        ),
        _product(
            tablets,
            'iPad Air 11" M2',
            'Apple iPad Air 11" with M2 chip, 128GB, Liquid Retina display.',
            "5999.00",
            "https://images.unsplash.com/photo-1544244015-0df4b3ffc6b0?w=400",
        ),
        _product(
            watches,
            "Apple Watch Series 9",
            "Apple Watch Series 9 GPS 45mm, always-on Retina display, blood oxygen sensor.",
            "3699.00",
            "https://images.unsplash.com/photo-1434493789847-2f02dc6ca35d?w=400",
        ),
    ]
    db.add_all(products)
    db.flush()

    for p in products:
        p.price = calculate_total(p)
    return products


def seed_store(db: Session):
    db.add(
        StoreSettings(
            store_name="TechStore",
            phone="+55 11 99999-0000",
            is_open=True,
            minimum_order=Decimal("50.00"),
            delivery_message="Delivery in up to 60 minutes.",
        )
    )
    db.add_all(
        [
            DeliveryZone(neighborhood_name="Centro", delivery_fee=Decimal("5.00")),
            DeliveryZone(neighborhood_name="Jardins", delivery_fee=Decimal("8.00")),
            DeliveryZone(neighborhood_name="Moema", delivery_fee=Decimal("10.00"), is_active=False),
        ]
    )
    db.add(
        Banner(
            name="Launch week",
            title="iPhone 15 Pro",
            description="Now with free delivery",
            price=Decimal("8999.00"),
            is_active=True,
        )
    )


def seed_inventory(db: Session, products: list[Product]):
    levels = [(12, 3), (2, 3), (0, 2), (5, 2), (8, 2), (25, 5), (60, 10), (4, 2), (3, 2)]
    for product, (stock, minimum) in zip(products, levels):
        db.add(
            InventoryItem(
                product_id=product.id,
                current_stock=stock,
                min_stock=minimum,
                max_stock=minimum * 10,
                reorder_point=minimum + 1,
                cost_per_unit=(product.price * Decimal("0.7")).quantize(Decimal("0.01")),
                supplier="Distribuidora Central",
                location="A1",
            )
        )


def seed_orders(db: Session, products: list[Product]):
    def line(product: Product, quantity: int) -> OrderItem:
        return OrderItem(
            product_id=product.id,
            product_name=product.name,
            quantity=quantity,
            unit_price=product.price,
            total_price=product.price * quantity,
        )

    first = [line(products[5], 1), line(products[6], 2)]
    second = [line(products[0], 1)]
    for number, (items, status, paid, fee) in enumerate(
        [
            (first, "preparing", "paid", Decimal("5.00")),
            (second, "pending", "pending", Decimal("8.00")),
        ],
        start=1,
    ):
        subtotal = sum((i.total_price for i in items), Decimal("0.00"))
        db.add(
            Order(
                order_number=f"{number:05d}",
                customer_name="Maria Silva" if number == 1 else "João Souza",
                customer_phone="+55 11 98888-000" + str(number),
                street_name="Rua Augusta",
                house_number=str(100 * number),
                neighborhood="Centro" if number == 1 else "Jardins",
                payment_method="pix",
                order_status=status,
                payment_status=paid,
                subtotal=subtotal,
                delivery_fee=fee,
                total=subtotal + fee,
                items=items,
            )
        )


def main():
    db = SessionLocal()
    try:
        reset_db(db)
        categories = seed_categories(db)
        products = seed_products(db, categories)
        seed_store(db)
        seed_inventory(db, products)
        seed_orders(db, products)
        db.commit()

        print("✅ Seed complete.")
        print("Try:")
        print("- GET  /api/products?admin=true")
        print("- POST /api/products/1/recalculate-price")
        print("- POST /api/products/recalculate-all-prices")
        print("- GET  /api/orders/summary")
        print("- GET  /api/inventory?stock=low")
    finally:
        db.close()


if __name__ == "__main__":
    main()
