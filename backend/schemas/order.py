# backend/schemas/order.py
from pydantic import Field
from typing import List, Optional
from datetime import datetime

from schemas.base import ORMBase
from models.order import OrderStatus, PaymentMethod, PaymentStatus


# Postal/contact record; every field is required
class ShippingAddress(ORMBase):
    full_name: str = Field(min_length=1)
    phone_number: str = Field(min_length=1)
    email: str = Field(min_length=1)
    street: str = Field(min_length=1)
    city: str = Field(min_length=1)
    province: str = Field(min_length=1)
    postal_code: str = Field(min_length=1)
    country: str = Field(min_length=1)


# Line of the order payload, flattened from cart item variants by the client
class OrderItemIn(ORMBase):
    product: int
    size: str = Field(min_length=1)
    quantity: int = Field(ge=1)


# Input schema for creating an order; emptiness of items is a domain error, not a schema one
class OrderCreatePayload(ORMBase):
    items: Optional[List[OrderItemIn]] = None
    shipping_address: ShippingAddress
    subtotal: float = Field(ge=0)
    shipping_fee: float = Field(default=0, ge=0)
    total: float = Field(ge=0)


class PaymentPayload(ORMBase):
    method: PaymentMethod
    transaction_id: Optional[str] = None


# Validated by the service so an unknown status maps to "Invalid status"
class OrderStatusPatch(ORMBase):
    status: str


class PaymentOut(ORMBase):
    method: PaymentMethod
    status: PaymentStatus
    transaction_id: Optional[str] = None


class OrderItemOut(ORMBase):
    product: int
    size: str
    quantity: int
    product_name: Optional[str] = None
    price: Optional[float] = None


class OrderOut(ORMBase):
    id: str
    user_id: Optional[int] = Field(default=None, alias="user")
    items: List[OrderItemOut]
    shipping_address: ShippingAddress
    payment: PaymentOut
    subtotal: float
    shipping_fee: float
    total: float
    status: OrderStatus
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OrderResponse(ORMBase):
    message: str
    order: OrderOut


# Single-order read: the order alone, no message
class OrderDetailResponse(ORMBase):
    order: OrderOut


class OrdersResponse(ORMBase):
    message: str
    orders: List[OrderOut]
