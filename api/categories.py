import logging
import uuid
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from db import get_db
from models.category import Category
from schemas.category import CategoryCreate, CategoryOut, CategoryUpdate


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/categories", tags=["Categories"])


#--------------------------------------------------------------------------------------------------
# ---------------------------------- Category CRUD Operations ------------------------------------
#--------------------------------------------------------------------------------------------------

@router.get("/", response_model=List[CategoryOut])
def get_categories(db: Session = Depends(get_db)):
    return db.query(Category).order_by(Category.created_at.asc()).all()


@router.post("/", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(data: CategoryCreate, db: Session = Depends(get_db)):
    category = Category(name=data.name.strip(), image=data.image or "")

    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@router.put("/{category_id}", response_model=CategoryOut)
def update_category(
    category_id: uuid.UUID,
    data: CategoryUpdate,
    db: Session = Depends(get_db),
):
    category = db.query(Category).filter(Category.id == category_id).first()

    if not category:
        raise HTTPException(404, "Category not found")

    if data.name is not None:
        category.name = data.name.strip()
    if data.image:
        category.image = data.image

    db.commit()
    db.refresh(category)
    return category


@router.delete("/")
def delete_all_categories(db: Session = Depends(get_db)):
    deleted = db.query(Category).delete()
    db.commit()
    logger.info(f"Deleted {deleted} categories")
    return {"message": "All categories deleted successfully"}


@router.delete("/{category_id}")
def delete_category(category_id: uuid.UUID, db: Session = Depends(get_db)):
    category = db.query(Category).filter(Category.id == category_id).first()

    if not category:
        raise HTTPException(404, "Category not found")

    db.delete(category)
    db.commit()
    return {"message": "Category deleted successfully"}
