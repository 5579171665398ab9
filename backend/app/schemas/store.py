from datetime import datetime
from decimal import Decimal

from pydantic import Field

from app.schemas.base import CamelModel


# ---------- Banners ----------

class BannerIn(CamelModel):
    name: str = Field(..., min_length=1)
    title: str = ""
    description: str = ""
    price: Decimal | None = Field(None, ge=0)
    image_url: str = ""
    gradient_color1: str = "#ff6b35"
    gradient_color2: str = "#f7931e"
    gradient_color3: str = "#ffd23f"
    gradient_color4: str = "#ff8c42"
    use_background_image: bool = False


class BannerOut(BannerIn):
    id: int
    is_active: bool
    created_at: datetime | None = None


# ---------- Delivery zones ----------

class DeliveryZoneIn(CamelModel):
    neighborhood_name: str = Field(..., min_length=1)
    delivery_fee: Decimal = Field(..., ge=0)
    is_active: bool = True


class DeliveryZoneOut(DeliveryZoneIn):
    id: int


# ---------- Store settings ----------

class StoreSettingsIn(CamelModel):
    store_name: str | None = None
    phone: str | None = None
    is_open: bool | None = None
    minimum_order: Decimal | None = Field(None, ge=0)
    delivery_message: str | None = None


class StoreSettingsOut(CamelModel):
    store_name: str
    phone: str
    is_open: bool
    minimum_order: Decimal
    delivery_message: str
    updated_at: datetime | None = None
