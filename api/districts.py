import logging
import uuid
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from db import get_db
from models.district import District
from schemas.district import DistrictCreate, DistrictOut, DistrictUpdate


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/districts", tags=["Districts"])


#------------------------------
# get all districts
#------------------------------
@router.get("/", response_model=List[DistrictOut])
def get_districts(db: Session = Depends(get_db)):
    return db.query(District).order_by(District.created_at.asc()).all()


#------------------------------
# get district by id
#------------------------------
@router.get("/{district_id}", response_model=DistrictOut)
def get_district(district_id: uuid.UUID, db: Session = Depends(get_db)):
    district = db.query(District).filter(District.id == district_id).first()

    if not district:
        raise HTTPException(404, "District not found")

    return district


#------------------------------
# create district
#------------------------------
@router.post("/", response_model=DistrictOut, status_code=status.HTTP_201_CREATED)
def create_district(data: DistrictCreate, db: Session = Depends(get_db)):
    district = District(name=data.name.strip(), image=data.image or "")

    db.add(district)
    db.commit()
    db.refresh(district)
    return district


#------------------------------
# update district
#------------------------------
@router.put("/{district_id}", response_model=DistrictOut)
def update_district(
    district_id: uuid.UUID,
    data: DistrictUpdate,
    db: Session = Depends(get_db),
):
    district = db.query(District).filter(District.id == district_id).first()

    if not district:
        raise HTTPException(404, "District not found")

    if data.name is not None:
        district.name = data.name.strip()
    # Keep the current image unless a new one is given
    if data.image:
        district.image = data.image

    db.commit()
    db.refresh(district)
    return district


#------------------------------
# delete district
#------------------------------
@router.delete("/{district_id}")
def delete_district(district_id: uuid.UUID, db: Session = Depends(get_db)):
    district = db.query(District).filter(District.id == district_id).first()

    if not district:
        raise HTTPException(404, "District not found")

    db.delete(district)
    db.commit()
    return {"message": "District deleted successfully"}
