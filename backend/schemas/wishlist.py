# backend/schemas/wishlist.py
from pydantic import Field
from typing import List

from schemas.base import ORMBase
from schemas.product import ProductOut

class WishlistAdd(ORMBase):
    product_id: int

class WishlistOut(ORMBase):
    id: str
    user_id: int = Field(alias="user")
    products: List[int]

class WishlistResponse(ORMBase):
    message: str
    wishlist: WishlistOut

class WishlistProductsResponse(ORMBase):
    message: str
    products: List[ProductOut]
