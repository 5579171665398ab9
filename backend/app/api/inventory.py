from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.schemas.inventory import (
    InventoryItemIn,
    InventoryItemOut,
    InventoryItemUpdate,
    InventorySummary,
    Restock,
    StockFilter,
)
from app.services import inventory

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.get("", response_model=list[InventoryItemOut])
def list_inventory(q: str | None = None, stock: StockFilter = "all", db: Session = Depends(get_db)):
    return inventory.list_inventory(db, q=q, stock=stock)


@router.post("", response_model=InventoryItemOut, status_code=201)
def create_item(body: InventoryItemIn, db: Session = Depends(get_db)):
    return inventory.create_inventory_item(db, body)


@router.get("/summary", response_model=InventorySummary)
def inventory_summary(db: Session = Depends(get_db)):
    return inventory.inventory_summary(db)


@router.get("/{item_id}", response_model=InventoryItemOut)
def get_item(item_id: int, db: Session = Depends(get_db)):
    return inventory.get_inventory_item(db, item_id)


@router.put("/{item_id}", response_model=InventoryItemOut)
def update_item(item_id: int, body: InventoryItemUpdate, db: Session = Depends(get_db)):
    return inventory.update_inventory_item(db, item_id, body)


@router.post("/{item_id}/restock", response_model=InventoryItemOut)
def restock(item_id: int, body: Restock, db: Session = Depends(get_db)):
    return inventory.restock(db, item_id, body.quantity)


@router.delete("/{item_id}")
def delete_item(item_id: int, db: Session = Depends(get_db)):
    inventory.delete_inventory_item(db, item_id)
    return {"ok": True}
