# backend/schemas/cart.py
from pydantic import Field
from typing import List, Optional

from schemas.base import ORMBase
from schemas.product import ProductOut

# Request schema for adding an item to the cart
class CartAddItem(ORMBase):
    product_id: int
    size: str = Field(min_length=1)
    quantity: int = Field(ge=1)

# Request schema for removing one size of a product from the cart
class CartRemoveItem(ORMBase):
    product_id: int
    size: str = Field(min_length=1)

# Request schema for a single-step quantity change ("increment" / "decrement")
class CartUpdateQuantity(ORMBase):
    product_id: int
    size: str = Field(min_length=1)
    action: str = Field(min_length=1)

class CartVariantOut(ORMBase):
    size: str
    quantity: int

# One cart line: the product (resolved when it still exists) and its sizes
class CartItemOut(ORMBase):
    product_id: int
    product: Optional[ProductOut] = None
    variants: List[CartVariantOut]

# Entire cart; id and user are null for the placeholder of a user without a cart
class CartOut(ORMBase):
    id: Optional[int] = None
    user_id: Optional[int] = Field(default=None, alias="user")
    items: List[CartItemOut] = []
    is_active: bool = True

class CartResponse(ORMBase):
    message: str
    cart: CartOut
