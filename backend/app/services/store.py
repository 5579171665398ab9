import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.models.banner import Banner
from app.models.delivery_zone import DeliveryZone
from app.models.store_settings import StoreSettings
from app.schemas.store import BannerIn, DeliveryZoneIn, StoreSettingsIn

logger = logging.getLogger(__name__)


# -------------------------
# Banners
# -------------------------

def list_banners(db: Session) -> list[Banner]:
    return db.query(Banner).order_by(Banner.id).all()


def get_banner(db: Session, banner_id: int) -> Banner:
    banner = db.get(Banner, banner_id)
    if not banner:
        raise NotFoundError(f"Banner {banner_id} not found")
    return banner


def get_active_banner(db: Session) -> Banner:
    banner = db.query(Banner).filter(Banner.is_active == True).first()  # noqa: E712
    if not banner:
        raise NotFoundError("No active banner")
    return banner


def create_banner(db: Session, data: BannerIn) -> Banner:
    banner = Banner(**data.model_dump(), is_active=False)
    db.add(banner)
    db.commit()
    db.refresh(banner)
    return banner


def update_banner(db: Session, banner_id: int, data: BannerIn) -> Banner:
    banner = get_banner(db, banner_id)
    for field, value in data.model_dump().items():
        setattr(banner, field, value)
    db.commit()
    db.refresh(banner)
    return banner


def activate_banner(db: Session, banner_id: int) -> Banner:
    """Only one banner is live on the storefront at a time."""
    banner = get_banner(db, banner_id)
    db.query(Banner).filter(Banner.id != banner.id).update({Banner.is_active: False})
    banner.is_active = True
    db.commit()
    db.refresh(banner)
    logger.info("banner %s activated", banner_id)
    return banner


def delete_banner(db: Session, banner_id: int) -> None:
    db.delete(get_banner(db, banner_id))
    db.commit()


# -------------------------
# Delivery zones
# -------------------------

def list_delivery_zones(db: Session, active_only: bool = False) -> list[DeliveryZone]:
    stmt = db.query(DeliveryZone)
    if active_only:
        stmt = stmt.filter(DeliveryZone.is_active == True)  # noqa: E712
    return stmt.order_by(DeliveryZone.neighborhood_name).all()


def get_delivery_zone(db: Session, zone_id: int) -> DeliveryZone:
    zone = db.get(DeliveryZone, zone_id)
    if not zone:
        raise NotFoundError(f"Delivery zone {zone_id} not found")
    return zone


def create_delivery_zone(db: Session, data: DeliveryZoneIn) -> DeliveryZone:
    zone = DeliveryZone(**data.model_dump())
    zone.neighborhood_name = zone.neighborhood_name.strip()
    db.add(zone)
    db.commit()
    db.refresh(zone)
    return zone


def update_delivery_zone(db: Session, zone_id: int, data: DeliveryZoneIn) -> DeliveryZone:
    zone = get_delivery_zone(db, zone_id)
    for field, value in data.model_dump().items():
        setattr(zone, field, value)
    zone.neighborhood_name = zone.neighborhood_name.strip()
    db.commit()
    db.refresh(zone)
    return zone


def delete_delivery_zone(db: Session, zone_id: int) -> None:
    db.delete(get_delivery_zone(db, zone_id))
    db.commit()


# -------------------------
# Store settings (single row)
# -------------------------

def get_store_settings(db: Session) -> StoreSettings:
    row = db.query(StoreSettings).order_by(StoreSettings.id).first()
    if row:
        return row
    row = StoreSettings()
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def update_store_settings(db: Session, data: StoreSettingsIn) -> StoreSettings:
    row = get_store_settings(db)
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(row, field, value)
    row.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(row)
    return row
