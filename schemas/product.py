from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Literal, Optional
from uuid import UUID


class WeightOption(BaseModel):
    value: float = Field(gt=0)
    unit: str = Field(min_length=1)
    price: float = Field(gt=0)
    quantity: int = Field(ge=0)


class Variant(BaseModel):
    weights: List[WeightOption] = Field(min_length=1)


class ProductIn(BaseModel):
    name: str
    image: str
    subtitle: str
    description: str
    category: str
    district: str
    rating_value: Optional[float] = None
    variants: List[Variant] = Field(min_length=1)

    @field_validator("name", "image", "subtitle", "description", "category", "district")
    def not_blank(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Name, image, subtitle, description, category and district are required")
        return v


class ProductOut(ProductIn):
    id: UUID
    is_trending: bool
    trending_order: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# One row per (variant, weight) pair of a product
class ProductWeightOut(BaseModel):
    id: UUID
    variant_index: int
    weight_index: int
    name: str
    image: str
    subtitle: str
    description: str
    category: str
    district: str
    rating_value: Optional[float] = None
    weight: WeightOption
    weight_quantity: int
    is_trending: bool
    trending_order: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TrendingUpdate(BaseModel):
    is_trending: bool


class TrendingOrderUpdate(BaseModel):
    direction: Literal["up", "down"]


class WeightQuantityUpdate(BaseModel):
    quantity: int = Field(ge=0)
