from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from uuid import UUID


class CartItemBase(BaseModel):
    product_id: str
    name: Optional[str] = None
    image: Optional[str] = None
    category: Optional[str] = None
    district: Optional[str] = None
    description: Optional[str] = None
    subtitle: Optional[str] = None
    price: Optional[float] = None
    weight: Optional[str] = None
    quantity: int = Field(default=1, ge=1)
    rating_value: Optional[float] = None
    variant_index: Optional[int] = None
    weight_index: Optional[int] = None


class CartItemCreate(CartItemBase):
    pass


class CartItemUpdate(BaseModel):
    quantity: int = Field(ge=1)


class CartItemOut(CartItemBase):
    id: UUID
    user_phone: str

    model_config = ConfigDict(from_attributes=True)


class CartClearOut(BaseModel):
    message: str
    deleted_count: int
