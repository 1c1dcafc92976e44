import logging
import uuid
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import flag_modified

from db import get_db
from models.product import Product
from schemas.product import (
    ProductIn,
    ProductOut,
    ProductWeightOut,
    TrendingOrderUpdate,
    TrendingUpdate,
    WeightQuantityUpdate,
)


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["Products"])


def _get_product(db: Session, product_id: uuid.UUID) -> Product:
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise HTTPException(404, "Product not found")
    return product


def _get_variant(product: Product, variant_index: int) -> dict:
    if not 0 <= variant_index < len(product.variants):
        raise HTTPException(404, "Variant not found at index")
    return product.variants[variant_index]


def _get_weight(variant: dict, weight_index: int) -> dict:
    if not 0 <= weight_index < len(variant["weights"]):
        raise HTTPException(404, "Weight option not found at index")
    return variant["weights"][weight_index]


def _weight_row(product: Product, variant_index: int, weight_index: int, weight: dict) -> dict:
    return {
        "id": product.id,
        "variant_index": variant_index,
        "weight_index": weight_index,
        "name": product.name,
        "image": product.image,
        "subtitle": product.subtitle,
        "description": product.description,
        "category": product.category,
        "district": product.district,
        "rating_value": product.rating_value,
        "weight": weight,
        "weight_quantity": weight["quantity"],
        "is_trending": product.is_trending,
        "trending_order": product.trending_order,
        "created_at": product.created_at,
        "updated_at": product.updated_at,
    }


def _apply(product: Product, data: ProductIn):
    product.name = data.name
    product.image = data.image
    product.subtitle = data.subtitle
    product.description = data.description
    product.category = data.category
    product.district = data.district
    product.rating_value = data.rating_value
    product.variants = [variant.model_dump() for variant in data.variants]


#--------------------------------------------------------------------------------------------------
# ---------------------------------- Product listing ---------------------------------------------
#--------------------------------------------------------------------------------------------------

@router.get("/", response_model=List[ProductWeightOut])
def get_products(db: Session = Depends(get_db)):
    products = db.query(Product).order_by(Product.created_at.asc()).all()
    return [
        _weight_row(product, v_idx, w_idx, weight)
        for product in products
        for v_idx, variant in enumerate(product.variants)
        for w_idx, weight in enumerate(variant["weights"])
    ]


@router.get("/trending", response_model=List[ProductOut])
def get_trending_products(db: Session = Depends(get_db)):
    return (
        db.query(Product)
        .filter(Product.is_trending == True)
        .order_by(Product.trending_order.asc())
        .all()
    )


#--------------------------------------------------------------------------------------------------
# ---------------------------------- Trending management -----------------------------------------
#--------------------------------------------------------------------------------------------------

@router.put("/{product_id}/trending")
def set_trending(product_id: uuid.UUID, data: TrendingUpdate, db: Session = Depends(get_db)):
    product = _get_product(db, product_id)

    if data.is_trending and not product.is_trending:
        # New trending products go to the end of the list
        product.trending_order = db.query(Product).filter(Product.is_trending == True).count()
        product.is_trending = True
    elif not data.is_trending and product.is_trending:
        removed_order = product.trending_order
        product.is_trending = False
        product.trending_order = -1
        # Close the gap so neighbours stay one position apart
        db.query(Product).filter(
            Product.is_trending == True,
            Product.trending_order > removed_order,
        ).update({Product.trending_order: Product.trending_order - 1}, synchronize_session="fetch")

    db.commit()
    return {"success": True}


@router.put("/{product_id}/trending-order")
def move_trending(product_id: uuid.UUID, data: TrendingOrderUpdate, db: Session = Depends(get_db)):
    product = db.query(Product).filter(Product.id == product_id).first()

    if not product or not product.is_trending:
        raise HTTPException(400, "Product not found or not trending")

    current_order = product.trending_order
    target_order = current_order - 1 if data.direction == "up" else current_order + 1

    if target_order >= 0:
        neighbour = db.query(Product).filter(
            Product.is_trending == True,
            Product.trending_order == target_order,
        ).first()

        if neighbour:
            neighbour.trending_order = current_order
            product.trending_order = target_order
            db.commit()

    return {"success": True}


#--------------------------------------------------------------------------------------------------
# ---------------------------------- Product CRUD ------------------------------------------------
#--------------------------------------------------------------------------------------------------

@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: uuid.UUID, db: Session = Depends(get_db)):
    return _get_product(db, product_id)


@router.post("/", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def create_product(data: ProductIn, db: Session = Depends(get_db)):
    product = Product()
    _apply(product, data)

    db.add(product)
    db.commit()
    db.refresh(product)
    return product


@router.put("/{product_id}", response_model=ProductOut)
def update_product(product_id: uuid.UUID, data: ProductIn, db: Session = Depends(get_db)):
    product = _get_product(db, product_id)
    _apply(product, data)

    db.commit()
    db.refresh(product)
    return product


@router.delete("/{product_id}")
def delete_product(product_id: uuid.UUID, db: Session = Depends(get_db)):
    product = _get_product(db, product_id)

    if product.is_trending:
        db.query(Product).filter(
            Product.is_trending == True,
            Product.trending_order > product.trending_order,
        ).update({Product.trending_order: Product.trending_order - 1}, synchronize_session="fetch")

    db.delete(product)
    db.commit()
    return {"message": "Product deleted successfully"}


#--------------------------------------------------------------------------------------------------
# ---------------------------------- Variants and weights ----------------------------------------
#--------------------------------------------------------------------------------------------------

@router.get("/{product_id}/{variant_index}/{weight_index}", response_model=ProductWeightOut)
def get_product_weight(
    product_id: uuid.UUID,
    variant_index: int,
    weight_index: int,
    db: Session = Depends(get_db),
):
    product = _get_product(db, product_id)
    weight = _get_weight(_get_variant(product, variant_index), weight_index)
    return _weight_row(product, variant_index, weight_index, weight)


@router.put("/{product_id}/{variant_index}/{weight_index}/quantity")
def update_weight_quantity(
    product_id: uuid.UUID,
    variant_index: int,
    weight_index: int,
    data: WeightQuantityUpdate,
    db: Session = Depends(get_db),
):
    product = _get_product(db, product_id)
    weight = _get_weight(_get_variant(product, variant_index), weight_index)

    weight["quantity"] = data.quantity
    # In-place change to a JSON column is invisible to the ORM
    flag_modified(product, "variants")
    db.commit()

    return {
        "message": "Weight quantity updated successfully",
        "updated_quantity": data.quantity,
    }


@router.delete("/{product_id}/{variant_index}")
def delete_variant(product_id: uuid.UUID, variant_index: int, db: Session = Depends(get_db)):
    product = _get_product(db, product_id)
    _get_variant(product, variant_index)

    product.variants = [v for i, v in enumerate(product.variants) if i != variant_index]
    db.commit()

    return {"message": f"Variant at index {variant_index} deleted successfully"}


@router.delete("/{product_id}/{variant_index}/{weight_index}")
def delete_weight(
    product_id: uuid.UUID,
    variant_index: int,
    weight_index: int,
    db: Session = Depends(get_db),
):
    product = _get_product(db, product_id)
    variant = _get_variant(product, variant_index)
    _get_weight(variant, weight_index)

    if len(variant["weights"]) == 1:
        raise HTTPException(400, "Cannot delete the last weight option. Delete the entire variant instead.")

    variant["weights"].pop(weight_index)
    flag_modified(product, "variants")
    db.commit()

    return {"message": f"Weight option at index {weight_index} deleted successfully"}
