"""
Draft values edited by the admin forms.

Drafts are frozen; a form never mutates one. Every user edit is expressed
as an action and applied with a reducer that returns the next draft:

    draft = reduce_product(draft, SetField("name", "iPhone 15"))
    draft = reduce_product(draft, AddImage("https://cdn.example.com/a.jpg"))

Required fields are checked here so an incomplete form never reaches the
network.
"""
from dataclasses import dataclass, fields, replace
from decimal import Decimal, InvalidOperation
from typing import Any, ClassVar

from pydantic.alias_generators import to_camel

from app.admin import gallery
from app.admin.gallery import Gallery, GalleryImage


class DraftValidationError(ValueError):
    def __init__(self, missing: list[str], message: str | None = None):
        self.missing = missing
        super().__init__(message or "Missing required fields: " + ", ".join(missing))


# -------------------------
# Actions
# -------------------------

@dataclass(frozen=True)
class SetField:
    field: str
    value: Any


@dataclass(frozen=True)
class AddSpecification:
    attribute_name: str = ""
    attribute_value: str = ""
    price_modifier: str = "0"


@dataclass(frozen=True)
class UpdateSpecification:
    index: int
    field: str
    value: Any


@dataclass(frozen=True)
class RemoveSpecification:
    index: int


@dataclass(frozen=True)
class AddImage:
    url: str
    alt_text: str = ""


@dataclass(frozen=True)
class RemoveImage:
    index: int


@dataclass(frozen=True)
class SetMainImage:
    index: int


@dataclass(frozen=True)
class MoveImage:
    from_index: int
    to_index: int


# -------------------------
# Drafts
# -------------------------

def _blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _money(value) -> str:
    return "" if value is None else str(value)


def _decimal_or_none(value: str) -> Decimal | None:
    text = (value or "").strip().replace(",", ".")
    if not text:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    # NaN and Infinity are not amounts
    return value if value.is_finite() else None


@dataclass(frozen=True)
class SpecificationDraft:
    attribute_name: str = ""
    attribute_value: str = ""
    price_modifier: str = "0"
    is_active: bool = True
    id: int | None = None

    @property
    def is_complete(self) -> bool:
        return bool(self.attribute_name.strip() and self.attribute_value.strip())


@dataclass(frozen=True)
class ProductDraft:
    name: str = ""
    description: str = ""
    price: str = ""
    original_price: str = ""
    category_id: int | None = None
    image_url: str = ""
    is_available: bool = True
    is_featured: bool = False
    is_promotion: bool = False
    specifications: tuple[SpecificationDraft, ...] = ()
    images: Gallery = ()
    id: int | None = None

    REQUIRED: ClassVar[tuple[str, ...]] = ("name", "description", "price", "category_id")
    STRUCTURAL: ClassVar[frozenset[str]] = frozenset({"id", "specifications", "images"})

    @property
    def is_new(self) -> bool:
        return self.id is None

    @classmethod
    def from_product(cls, payload: dict) -> "ProductDraft":
        """Edit draft for a product as returned by GET /api/products/{id}."""
        base = payload.get("basePrice")
        if base is None:
            base = payload.get("price")

        specs = tuple(
            SpecificationDraft(
                attribute_name=a.get("attributeName", ""),
                attribute_value=a.get("attributeValue", ""),
                price_modifier=_money(a.get("priceModifier")) or "0",
                is_active=a.get("isActive", True),
                id=a.get("id"),
            )
            for a in payload.get("attributes") or []
        )
        images = tuple(
            GalleryImage(
                image_url=img["imageUrl"],
                display_order=position,
                is_main=bool(img.get("isMain")),
                alt_text=img.get("altText") or "",
                id=img.get("id"),
            )
            for position, img in enumerate(
                sorted(payload.get("images") or [], key=lambda i: i.get("displayOrder", 0))
            )
        )
        return cls(
            id=payload.get("id"),
            name=payload.get("name", ""),
            description=payload.get("description", ""),
            price=_money(base),
            original_price=_money(payload.get("originalPrice")),
            category_id=payload.get("categoryId"),
            image_url=payload.get("imageUrl") or "",
            is_available=payload.get("isAvailable", True),
            is_featured=payload.get("isFeatured", False),
            is_promotion=payload.get("isPromotion", False),
            specifications=specs,
            images=images,
        )

    def to_payload(self) -> dict:
        main = gallery.main_image(self.images)
        original = _decimal_or_none(self.original_price)
        return {
            "name": self.name.strip(),
            "description": self.description,
            "price": str(_decimal_or_none(self.price)),
            "originalPrice": str(original) if original is not None else None,
            "categoryId": self.category_id,
            "imageUrl": main.image_url if main else self.image_url,
            "isAvailable": self.is_available,
            "isFeatured": self.is_featured,
            "isPromotion": self.is_promotion,
        }

    def specification_payloads(self, product_id: int) -> list[dict]:
        # incomplete rows are dropped, not sent; inactive ones stay inactive
        return [
            {
                "productId": product_id,
                "attributeName": spec.attribute_name.strip(),
                "attributeValue": spec.attribute_value.strip(),
                "priceModifier": str(_decimal_or_none(spec.price_modifier) or Decimal("0.00")),
                "isActive": spec.is_active,
            }
            for spec in self.specifications
            if spec.is_complete
        ]


@dataclass(frozen=True)
class BannerDraft:
    name: str = ""
    title: str = ""
    description: str = ""
    price: str = ""
    image_url: str = ""
    gradient_color1: str = "#ff6b35"
    gradient_color2: str = "#f7931e"
    gradient_color3: str = "#ffd23f"
    gradient_color4: str = "#ff8c42"
    use_background_image: bool = False
    id: int | None = None

    REQUIRED: ClassVar[tuple[str, ...]] = ("name",)
    STRUCTURAL: ClassVar[frozenset[str]] = frozenset({"id"})

    @property
    def is_new(self) -> bool:
        return self.id is None

    @classmethod
    def from_banner(cls, payload: dict) -> "BannerDraft":
        values = {
            f.name: payload[to_camel(f.name)]
            for f in fields(cls)
            if payload.get(to_camel(f.name)) is not None
        }
        values["price"] = _money(payload.get("price"))
        return cls(**values)

    def to_payload(self) -> dict:
        price = _decimal_or_none(self.price)
        payload = {
            to_camel(f.name): getattr(self, f.name)
            for f in fields(self)
            if f.name not in self.STRUCTURAL
        }
        payload["price"] = str(price) if price is not None else None
        return payload


@dataclass(frozen=True)
class DeliveryZoneDraft:
    neighborhood_name: str = ""
    delivery_fee: str = ""
    is_active: bool = True
    id: int | None = None

    REQUIRED: ClassVar[tuple[str, ...]] = ("neighborhood_name", "delivery_fee")
    STRUCTURAL: ClassVar[frozenset[str]] = frozenset({"id"})

    @property
    def is_new(self) -> bool:
        return self.id is None

    @classmethod
    def from_zone(cls, payload: dict) -> "DeliveryZoneDraft":
        return cls(
            id=payload.get("id"),
            neighborhood_name=payload.get("neighborhoodName", ""),
            delivery_fee=_money(payload.get("deliveryFee")),
            is_active=payload.get("isActive", True),
        )

    def to_payload(self) -> dict:
        return {
            "neighborhoodName": self.neighborhood_name.strip(),
            "deliveryFee": str(_decimal_or_none(self.delivery_fee)),
            "isActive": self.is_active,
        }


@dataclass(frozen=True)
class InventoryDraft:
    product_id: int | None = None
    current_stock: int = 0
    min_stock: int = 0
    max_stock: int = 100
    reorder_point: int = 0
    cost_per_unit: str = ""
    supplier: str = ""
    location: str = ""
    notes: str = ""
    is_active: bool = True
    id: int | None = None

    REQUIRED: ClassVar[tuple[str, ...]] = ("product_id",)
    STRUCTURAL: ClassVar[frozenset[str]] = frozenset({"id"})

    @property
    def is_new(self) -> bool:
        return self.id is None

    @classmethod
    def from_item(cls, payload: dict) -> "InventoryDraft":
        return cls(
            id=payload.get("id"),
            product_id=payload.get("productId"),
            current_stock=payload.get("currentStock", 0),
            min_stock=payload.get("minStock", 0),
            max_stock=payload.get("maxStock", 100),
            reorder_point=payload.get("reorderPoint", 0),
            cost_per_unit=_money(payload.get("costPerUnit")),
            supplier=payload.get("supplier") or "",
            location=payload.get("location") or "",
            notes=payload.get("notes") or "",
            is_active=payload.get("isActive", True),
        )

    def to_payload(self) -> dict:
        payload = {
            "currentStock": self.current_stock,
            "minStock": self.min_stock,
            "maxStock": self.max_stock,
            "reorderPoint": self.reorder_point,
            "costPerUnit": str(_decimal_or_none(self.cost_per_unit) or Decimal("0.00")),
            "supplier": self.supplier.strip() or None,
            "location": self.location.strip() or None,
            "notes": self.notes.strip() or None,
            "isActive": self.is_active,
        }
        # the product of an existing item is fixed
        if self.is_new:
            payload["productId"] = self.product_id
        return payload


# -------------------------
# Validation
# -------------------------

def missing_fields(draft) -> list[str]:
    """camelCase names of the required fields that are still empty."""
    return [to_camel(name) for name in draft.REQUIRED if _blank(getattr(draft, name))]


def validate_draft(draft) -> None:
    missing = missing_fields(draft)
    if missing:
        raise DraftValidationError(missing)

    for name in ("price", "original_price", "delivery_fee", "cost_per_unit"):
        raw = getattr(draft, name, "")
        if _blank(raw):
            continue
        value = _decimal_or_none(raw)
        if value is None or value < 0:
            raise DraftValidationError([to_camel(name)], f"Invalid amount for {to_camel(name)}: {raw!r}")

    if isinstance(draft, InventoryDraft):
        _check_stock_levels(draft)


def _check_stock_levels(draft: InventoryDraft) -> None:
    levels = ("current_stock", "min_stock", "max_stock", "reorder_point")
    for name in levels:
        value = getattr(draft, name)
        if not isinstance(value, int) or value < 0:
            raise DraftValidationError([to_camel(name)], f"Invalid quantity for {to_camel(name)}: {value!r}")
    if draft.min_stock > draft.max_stock:
        raise DraftValidationError(["minStock"], "minStock cannot exceed maxStock")
    if draft.reorder_point > draft.max_stock:
        raise DraftValidationError(["reorderPoint"], "reorderPoint cannot exceed maxStock")


# -------------------------
# Reducers
# -------------------------

def _set_field(draft, action: SetField):
    editable = {f.name for f in fields(draft)} - draft.STRUCTURAL
    if action.field not in editable:
        raise ValueError(f"{type(draft).__name__} has no editable field {action.field!r}")
    return replace(draft, **{action.field: action.value})


def _specs_with(specs, index: int, spec: SpecificationDraft | None):
    if not 0 <= index < len(specs):
        raise IndexError(f"specification index {index} out of range")
    items = list(specs)
    if spec is None:
        del items[index]
    else:
        items[index] = spec
    return tuple(items)


def reduce_product(draft: ProductDraft, action) -> ProductDraft:
    if isinstance(action, SetField):
        return _set_field(draft, action)

    if isinstance(action, AddSpecification):
        spec = SpecificationDraft(action.attribute_name, action.attribute_value, action.price_modifier)
        return replace(draft, specifications=draft.specifications + (spec,))
    if isinstance(action, UpdateSpecification):
        if action.field not in ("attribute_name", "attribute_value", "price_modifier", "is_active"):
            raise ValueError(f"Unknown specification field {action.field!r}")
        if not 0 <= action.index < len(draft.specifications):
            raise IndexError(f"specification index {action.index} out of range")
        updated = replace(draft.specifications[action.index], **{action.field: action.value})
        return replace(draft, specifications=_specs_with(draft.specifications, action.index, updated))
    if isinstance(action, RemoveSpecification):
        return replace(draft, specifications=_specs_with(draft.specifications, action.index, None))

    if isinstance(action, AddImage):
        return replace(draft, images=gallery.add_image(draft.images, action.url, action.alt_text))
    if isinstance(action, RemoveImage):
        return replace(draft, images=gallery.remove_image(draft.images, action.index))
    if isinstance(action, SetMainImage):
        return replace(draft, images=gallery.set_main_image(draft.images, action.index))
    if isinstance(action, MoveImage):
        return replace(draft, images=gallery.move_image(draft.images, action.from_index, action.to_index))

    raise TypeError(f"Unsupported product action: {action!r}")


def reduce_banner(draft: BannerDraft, action) -> BannerDraft:
    if isinstance(action, SetField):
        return _set_field(draft, action)
    raise TypeError(f"Unsupported banner action: {action!r}")


def reduce_delivery_zone(draft: DeliveryZoneDraft, action) -> DeliveryZoneDraft:
    if isinstance(action, SetField):
        return _set_field(draft, action)
    raise TypeError(f"Unsupported delivery zone action: {action!r}")


def reduce_inventory_item(draft: InventoryDraft, action) -> InventoryDraft:
    if isinstance(action, SetField):
        return _set_field(draft, action)
    raise TypeError(f"Unsupported inventory action: {action!r}")
