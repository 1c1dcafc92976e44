from pydantic import BaseModel, ConfigDict
from typing import Optional
from uuid import UUID


class DistrictBase(BaseModel):
    name: str
    image: Optional[str] = ""


class DistrictCreate(DistrictBase):
    pass


class DistrictUpdate(BaseModel):
    name: Optional[str] = None
    image: Optional[str] = None


class DistrictOut(DistrictBase):
    id: UUID

    model_config = ConfigDict(from_attributes=True)
