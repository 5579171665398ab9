from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.schemas.order import (
    OrderIn,
    OrderOut,
    OrderStatus,
    OrderStatusUpdate,
    OrderSummary,
    PaymentStatusUpdate,
)
from app.services import orders

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("", response_model=list[OrderOut])
def list_orders(status: OrderStatus | None = None, db: Session = Depends(get_db)):
    return orders.list_orders(db, status=status)


@router.post("", response_model=OrderOut, status_code=201)
def create_order(body: OrderIn, db: Session = Depends(get_db)):
    return orders.create_order(db, body)


# static path, must be declared before /{order_id}
@router.get("/summary", response_model=OrderSummary)
def order_summary(db: Session = Depends(get_db)):
    return orders.order_summary(db)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: int, db: Session = Depends(get_db)):
    return orders.get_order(db, order_id)


@router.put("/{order_id}/status", response_model=OrderOut)
def update_status(order_id: int, body: OrderStatusUpdate, db: Session = Depends(get_db)):
    return orders.update_order_status(db, order_id, body.status)


@router.put("/{order_id}/payment-status", response_model=OrderOut)
def update_payment_status(order_id: int, body: PaymentStatusUpdate, db: Session = Depends(get_db)):
    return orders.update_payment_status(db, order_id, body.payment_status)


@router.delete("/{order_id}")
def delete_order(order_id: int, db: Session = Depends(get_db)):
    orders.delete_order(db, order_id)
    return {"ok": True}
