from pydantic import BaseModel, ConfigDict
from typing import Optional
from uuid import UUID


class CategoryBase(BaseModel):
    name: str
    image: Optional[str] = ""


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    image: Optional[str] = None


class CategoryOut(CategoryBase):
    id: UUID

    model_config = ConfigDict(from_attributes=True)
