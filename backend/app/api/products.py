from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.schemas.product import (
    BulkPriceRecalculation,
    PriceRecalculation,
    ProductAttributeIn,
    ProductAttributeOut,
    ProductImageIn,
    ProductImageOut,
    ProductIn,
    ProductOut,
    ProductUpdate,
)
from app.services import catalog, pricing

router = APIRouter(prefix="/api", tags=["products"])


# ---------- Products ----------

@router.get("/products", response_model=list[ProductOut])
def list_products(
    category_id: int | None = Query(None, alias="categoryId"),
    featured: bool | None = None,
    q: str | None = None,
    admin: bool = False,
    db: Session = Depends(get_db),
):
    return catalog.list_products(
        db,
        category_id=category_id,
        featured=featured,
        q=q,
        include_unavailable=admin,
    )


@router.post("/products", response_model=ProductOut, status_code=201)
def create_product(body: ProductIn, db: Session = Depends(get_db)):
    return catalog.create_product(db, body)


# static path, must be declared before /products/{product_id}
@router.post("/products/recalculate-all-prices", response_model=BulkPriceRecalculation)
def recalculate_all_prices(db: Session = Depends(get_db)):
    return pricing.recalculate_all_prices(db)


@router.get("/products/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return catalog.get_product(db, product_id)


@router.put("/products/{product_id}", response_model=ProductOut)
def update_product(product_id: int, body: ProductUpdate, db: Session = Depends(get_db)):
    return catalog.update_product(db, product_id, body)


@router.delete("/products/{product_id}")
def delete_product(product_id: int, db: Session = Depends(get_db)):
    catalog.delete_product(db, product_id)
    return {"ok": True}


@router.post("/products/{product_id}/recalculate-price", response_model=PriceRecalculation)
def recalculate_price(product_id: int, db: Session = Depends(get_db)):
    return pricing.recalculate_price(db, product_id)


# ---------- Images ----------

@router.get("/products/{product_id}/images", response_model=list[ProductImageOut])
def list_images(product_id: int, db: Session = Depends(get_db)):
    return catalog.list_product_images(db, product_id)


@router.post("/products/{product_id}/images", response_model=ProductImageOut, status_code=201)
def add_image(product_id: int, body: ProductImageIn, db: Session = Depends(get_db)):
    return catalog.add_product_image(db, product_id, body)


@router.delete("/products/{product_id}/images")
def clear_images(product_id: int, db: Session = Depends(get_db)):
    return {"ok": True, "deleted": catalog.clear_product_images(db, product_id)}


@router.delete("/products/{product_id}/images/{image_id}")
def delete_image(product_id: int, image_id: int, db: Session = Depends(get_db)):
    catalog.delete_product_image(db, product_id, image_id)
    return {"ok": True}


@router.put("/products/{product_id}/main-image/{image_id}", response_model=ProductImageOut)
def set_main_image(product_id: int, image_id: int, db: Session = Depends(get_db)):
    return catalog.set_main_image(db, product_id, image_id)


# ---------- Attributes ----------

@router.get("/products/{product_id}/attributes", response_model=list[ProductAttributeOut])
def list_product_attributes(product_id: int, db: Session = Depends(get_db)):
    catalog.get_product(db, product_id)
    return catalog.list_attributes(db, product_id)


@router.delete("/products/{product_id}/attributes")
def delete_product_attributes(product_id: int, db: Session = Depends(get_db)):
    return {"ok": True, "deleted": catalog.delete_product_attributes(db, product_id)}


@router.get("/product-attributes", response_model=list[ProductAttributeOut])
def list_attributes(
    product_id: int | None = Query(None, alias="productId"),
    db: Session = Depends(get_db),
):
    return catalog.list_attributes(db, product_id)


@router.post("/product-attributes", response_model=ProductAttributeOut, status_code=201)
def create_attribute(body: ProductAttributeIn, db: Session = Depends(get_db)):
    return catalog.create_attribute(db, body)


@router.delete("/product-attributes/{attribute_id}")
def delete_attribute(attribute_id: int, db: Session = Depends(get_db)):
    catalog.delete_attribute(db, attribute_id)
    return {"ok": True}
