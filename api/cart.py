import logging
import uuid
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from api.deps import get_current_phone
from db import get_db
from models.cart_item import CartItem
from schemas.cart import CartClearOut, CartItemCreate, CartItemOut, CartItemUpdate


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cart", tags=["Cart"])


def _find_cart_item(db: Session, phone: str, product_id: str):
    return db.query(CartItem).filter(
        CartItem.user_phone == phone,
        CartItem.product_id == product_id,
    ).first()


def _add_quantity(db: Session, cart_item: CartItem, quantity: int) -> CartItem:
    cart_item.quantity += quantity
    db.commit()
    db.refresh(cart_item)
    return cart_item


# ---------------- Add item ----------------
@router.post("/", response_model=CartItemOut, status_code=status.HTTP_201_CREATED)
def add_to_cart(
    item: CartItemCreate,
    response: Response,
    phone: str = Depends(get_current_phone),
    db: Session = Depends(get_db),
):
    existing = _find_cart_item(db, phone, item.product_id)
    if existing:
        response.status_code = status.HTTP_200_OK
        return _add_quantity(db, existing, item.quantity)

    cart_item = CartItem(user_phone=phone, **item.model_dump())
    db.add(cart_item)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        # A concurrent add for the same product inserted first
        existing = _find_cart_item(db, phone, item.product_id)
        if not existing:
            raise
        logger.info(f"Merged concurrent cart add for {phone} / {item.product_id}")
        response.status_code = status.HTTP_200_OK
        return _add_quantity(db, existing, item.quantity)

    db.refresh(cart_item)
    return cart_item


# ---------------- List items ----------------
@router.get("/", response_model=List[CartItemOut])
def get_cart(phone: str = Depends(get_current_phone), db: Session = Depends(get_db)):
    return db.query(CartItem).filter(CartItem.user_phone == phone).order_by(CartItem.created_at.asc()).all()


# ---------------- Update quantity ----------------
@router.put("/{item_id}", response_model=CartItemOut)
def update_cart_item(
    item_id: uuid.UUID,
    data: CartItemUpdate,
    phone: str = Depends(get_current_phone),
    db: Session = Depends(get_db),
):
    cart_item = db.query(CartItem).filter(
        CartItem.id == item_id,
        CartItem.user_phone == phone,
    ).first()

    if not cart_item:
        raise HTTPException(404, "Cart item not found")

    cart_item.quantity = data.quantity
    db.commit()
    db.refresh(cart_item)
    return cart_item


# ---------------- Remove item ----------------
@router.delete("/{item_id}")
def remove_cart_item(
    item_id: uuid.UUID,
    phone: str = Depends(get_current_phone),
    db: Session = Depends(get_db),
):
    cart_item = db.query(CartItem).filter(
        CartItem.id == item_id,
        CartItem.user_phone == phone,
    ).first()

    if not cart_item:
        raise HTTPException(404, "Cart item not found")

    db.delete(cart_item)
    db.commit()
    return {"message": "Item removed from cart"}


# ---------------- Clear cart ----------------
@router.delete("/", response_model=CartClearOut)
def clear_cart(phone: str = Depends(get_current_phone), db: Session = Depends(get_db)):
    logger.info(f"Clearing cart for user: {phone}")
    deleted = db.query(CartItem).filter(CartItem.user_phone == phone).delete()
    db.commit()
    logger.info(f"Cleared {deleted} items from cart")

    return {"message": "Cart cleared successfully", "deleted_count": deleted}
