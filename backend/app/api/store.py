from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.schemas.store import (
    BannerIn,
    BannerOut,
    DeliveryZoneIn,
    DeliveryZoneOut,
    StoreSettingsIn,
    StoreSettingsOut,
)
from app.services import store

router = APIRouter(prefix="/api", tags=["store"])


# ---------- Banners ----------

@router.get("/banners", response_model=list[BannerOut])
def list_banners(db: Session = Depends(get_db)):
    return store.list_banners(db)


@router.get("/banners/active", response_model=BannerOut)
def active_banner(db: Session = Depends(get_db)):
    return store.get_active_banner(db)


@router.post("/banners", response_model=BannerOut, status_code=201)
def create_banner(body: BannerIn, db: Session = Depends(get_db)):
    return store.create_banner(db, body)


@router.put("/banners/{banner_id}", response_model=BannerOut)
def update_banner(banner_id: int, body: BannerIn, db: Session = Depends(get_db)):
    return store.update_banner(db, banner_id, body)


@router.put("/banners/{banner_id}/activate", response_model=BannerOut)
def activate_banner(banner_id: int, db: Session = Depends(get_db)):
    return store.activate_banner(db, banner_id)


@router.delete("/banners/{banner_id}")
def delete_banner(banner_id: int, db: Session = Depends(get_db)):
    store.delete_banner(db, banner_id)
    return {"ok": True}


# ---------- Delivery zones ----------

@router.get("/delivery-zones", response_model=list[DeliveryZoneOut])
def list_delivery_zones(active: bool = False, db: Session = Depends(get_db)):
    return store.list_delivery_zones(db, active_only=active)


@router.post("/delivery-zones", response_model=DeliveryZoneOut, status_code=201)
def create_delivery_zone(body: DeliveryZoneIn, db: Session = Depends(get_db)):
    return store.create_delivery_zone(db, body)


@router.put("/delivery-zones/{zone_id}", response_model=DeliveryZoneOut)
def update_delivery_zone(zone_id: int, body: DeliveryZoneIn, db: Session = Depends(get_db)):
    return store.update_delivery_zone(db, zone_id, body)


@router.delete("/delivery-zones/{zone_id}")
def delete_delivery_zone(zone_id: int, db: Session = Depends(get_db)):
    store.delete_delivery_zone(db, zone_id)
    return {"ok": True}


# ---------- Store settings ----------

@router.get("/store/settings", response_model=StoreSettingsOut)
def get_settings(db: Session = Depends(get_db)):
    return store.get_store_settings(db)


@router.put("/store/settings", response_model=StoreSettingsOut)
def update_settings(body: StoreSettingsIn, db: Session = Depends(get_db)):
    return store.update_store_settings(db, body)
