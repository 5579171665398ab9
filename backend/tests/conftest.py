"""Shared fixtures: in-memory database, the ASGI app and admin clients."""
import os

# must be set before app.core.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["OPENAI_API_KEY"] = ""

from decimal import Decimal

import httpx
import pytest

from app.admin.client import StorefrontClient
from app.core.db import Base, SessionLocal, engine
from app.main import app
from app.models.category import Category
from app.models.product import Product, ProductAttribute


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
async def api():
    """Raw HTTP client talking to the app in-process."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def client():
    """Admin StorefrontClient talking to the app in-process."""
    async with StorefrontClient("http://test", transport=httpx.ASGITransport(app=app)) as c:
        yield c


@pytest.fixture
def category(db):
    c = Category(name="Smartphones", slug="smartphones", icon="smartphone", display_order=1)
    db.add(c)
    db.commit()
    db.refresh(c)
    return c


@pytest.fixture
def make_product(db, category):
    """
    Factory for products with attributes. `modifiers` holds price modifier
    strings, or (modifier, is_active) pairs.
    """
    def _make(price="100.00", modifiers=(), name="Test phone"):
        product = Product(
            name=name,
            description=f"{name} description",
            price=Decimal(price),
            base_price=Decimal(price),
            category_id=category.id,
        )
        for i, m in enumerate(modifiers):
            value, active = m if isinstance(m, tuple) else (m, True)
            product.attributes.append(
                ProductAttribute(
                    attribute_name=f"option {i}",
                    attribute_value=str(value),
                    price_modifier=Decimal(value),
                    is_active=active,
                )
            )
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make
