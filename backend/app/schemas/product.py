from datetime import datetime
from decimal import Decimal

from pydantic import Field

from app.schemas.base import CamelModel


class ProductImageIn(CamelModel):
    image_url: str = Field(..., min_length=1)
    alt_text: str | None = None
    is_main: bool = False


class ProductImageOut(CamelModel):
    id: int
    product_id: int
    image_url: str
    display_order: int
    is_main: bool
    alt_text: str


class ProductAttributeIn(CamelModel):
    product_id: int
    attribute_name: str = Field(..., min_length=1)
    attribute_value: str = Field(..., min_length=1)
    price_modifier: Decimal = Decimal("0.00")
    is_active: bool = True


class ProductAttributeOut(CamelModel):
    id: int
    product_id: int
    attribute_name: str
    attribute_value: str
    price_modifier: Decimal
    is_active: bool


class ProductIn(CamelModel):
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0)
    original_price: Decimal | None = Field(None, ge=0)
    category_id: int
    image_url: str = ""
    is_available: bool = True
    is_featured: bool = False
    is_promotion: bool = False


class ProductUpdate(CamelModel):
    name: str | None = Field(None, min_length=1)
    description: str | None = Field(None, min_length=1)
    price: Decimal | None = Field(None, ge=0)
    original_price: Decimal | None = Field(None, ge=0)
    category_id: int | None = None
    image_url: str | None = None
    is_available: bool | None = None
    is_featured: bool | None = None
    is_promotion: bool | None = None


class ProductOut(CamelModel):
    id: int
    name: str
    description: str
    price: Decimal
    base_price: Decimal | None = None
    original_price: Decimal | None = None
    category_id: int
    image_url: str
    is_available: bool
    is_featured: bool
    is_promotion: bool
    created_at: datetime | None = None
    attributes: list[ProductAttributeOut] = Field(default_factory=list)
    images: list[ProductImageOut] = Field(default_factory=list)


class PriceRecalculation(CamelModel):
    total_price: float
    formatted_price: str


class PriceFailure(CamelModel):
    product_id: int
    error: str


class BulkPriceRecalculation(CamelModel):
    updated: int
    failed: int
    failures: list[PriceFailure] = Field(default_factory=list)
