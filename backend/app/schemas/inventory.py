from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import Field

from app.schemas.base import CamelModel

StockFilter = Literal["all", "low", "out", "normal"]


class InventoryItemIn(CamelModel):
    product_id: int
    current_stock: int = Field(0, ge=0)
    min_stock: int = Field(0, ge=0)
    max_stock: int = Field(100, ge=0)
    reorder_point: int = Field(0, ge=0)
    cost_per_unit: Decimal = Field(Decimal("0.00"), ge=0)
    supplier: str | None = None
    location: str | None = None
    is_active: bool = True
    notes: str | None = None


class InventoryItemUpdate(CamelModel):
    current_stock: int | None = Field(None, ge=0)
    min_stock: int | None = Field(None, ge=0)
    max_stock: int | None = Field(None, ge=0)
    reorder_point: int | None = Field(None, ge=0)
    cost_per_unit: Decimal | None = Field(None, ge=0)
    supplier: str | None = None
    location: str | None = None
    is_active: bool | None = None
    notes: str | None = None


class Restock(CamelModel):
    quantity: int = Field(..., ge=1)


class InventoryItemOut(CamelModel):
    id: int
    product_id: int
    product_name: str
    current_stock: int
    min_stock: int
    max_stock: int
    reorder_point: int
    cost_per_unit: Decimal
    supplier: str | None = None
    location: str | None = None
    last_restocked: datetime | None = None
    is_active: bool
    notes: str | None = None
    stock_status: Literal["out", "low", "normal"]
    needs_reorder: bool


class InventorySummary(CamelModel):
    total_items: int
    low_stock: int
    out_of_stock: int
    total_value: Decimal
