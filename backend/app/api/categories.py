from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.schemas.category import CategoryIn, CategoryOut, CategoryUpdate
from app.services import catalog

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=list[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return catalog.list_categories(db)


@router.post("", response_model=CategoryOut, status_code=201)
def create_category(body: CategoryIn, db: Session = Depends(get_db)):
    return catalog.create_category(db, body)


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(category_id: int, db: Session = Depends(get_db)):
    return catalog.get_category(db, category_id)


@router.put("/{category_id}", response_model=CategoryOut)
def update_category(category_id: int, body: CategoryUpdate, db: Session = Depends(get_db)):
    return catalog.update_category(db, category_id, body)


@router.delete("/{category_id}")
def delete_category(category_id: int, db: Session = Depends(get_db)):
    catalog.delete_category(db, category_id)
    return {"ok": True}
