# backend/schemas/product.py
from pydantic import Field, field_validator
from typing import Optional, List
from datetime import datetime

from schemas.base import ORMBase


# Stock record for one size
class ProductSizeSchema(ORMBase):
    size: str = Field(min_length=1)
    stock: int = Field(ge=0)


def _unique_sizes(sizes: List[ProductSizeSchema]) -> List[ProductSizeSchema]:
    seen = set()
    for s in sizes:
        if s.size in seen:
            raise ValueError(f"Duplicate size '{s.size}'")
        seen.add(s.size)
    return sizes


# Payload for creating a catalog product
class ProductCreate(ORMBase):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    price: float = Field(ge=0)
    image_url: Optional[str] = None
    sizes: List[ProductSizeSchema] = []

    @field_validator("sizes")
    @classmethod
    def check_unique_sizes(cls, sizes):
        return _unique_sizes(sizes)


# Payload for setting per-size stock
class ProductSizesUpdate(ORMBase):
    sizes: List[ProductSizeSchema] = Field(min_length=1)

    @field_validator("sizes")
    @classmethod
    def check_unique_sizes(cls, sizes):
        return _unique_sizes(sizes)


class ProductOut(ORMBase):
    id: int
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    price: float
    image_url: Optional[str] = None
    sizes: List[ProductSizeSchema] = []
    created_at: Optional[datetime] = None


class ProductResponse(ORMBase):
    message: Optional[str] = None
    product: ProductOut


class ProductListResponse(ORMBase):
    message: str
    products: List[ProductOut]
