# backend/routes/orders.py
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from database import get_db
from utils.tokenJWT import get_current_user, role_required
from utils.audit import write_log, client_ip
from utils.errors import ShopError
from models.users import User
from models.order import Order
from schemas.order import (
    OrderCreatePayload, PaymentPayload, OrderStatusPatch,
    OrderOut, OrderItemOut, PaymentOut, ShippingAddress,
    OrderResponse, OrderDetailResponse, OrdersResponse,
)
from services import order_service

router = APIRouter(prefix="/orders", tags=["Orders"])

# Map Order model to OrderOut schema
def _order_to_out(order: Order) -> OrderOut:
    items = [
        OrderItemOut(
            product=it.product_id,
            size=it.size,
            quantity=it.quantity,
            product_name=it.product.name if it.product else None,
            price=it.product.price if it.product else None,
        )
        for it in order.items
    ]
    return OrderOut(
        id=order.id,
        user_id=order.user_id,
        items=items,
        shipping_address=ShippingAddress(
            full_name=order.shipping_full_name,
            phone_number=order.shipping_phone_number,
            email=order.shipping_email,
            street=order.shipping_street,
            city=order.shipping_city,
            province=order.shipping_province,
            postal_code=order.shipping_postal_code,
            country=order.shipping_country,
        ),
        payment=PaymentOut(
            method=order.payment_method,
            status=order.payment_status,
            transaction_id=order.payment_transaction_id,
        ),
        subtotal=order.subtotal,
        shipping_fee=order.shipping_fee,
        total=order.total,
        status=order.status,
        is_active=order.is_active,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )

def _fail(db: Session, user: User, request: Request, action: str, error: ShopError, meta: dict):
    db.rollback()
    write_log(db, user_id=user.id, action=action, resource="orders", status="FAIL",
              ip=client_ip(request), meta={**meta, "reason": error.message})

# List every order, newest first (Admin only)
@router.get("", response_model=OrdersResponse)
def get_all_orders(
    db: Session = Depends(get_db),
    current_user: User = Depends(role_required("admin"))
):
    orders = order_service.list_orders(db)
    return OrdersResponse(message="All orders retrieved successfully", orders=[_order_to_out(o) for o in orders])

# Orders placed by the current user, newest first
@router.get("/user/all", response_model=OrdersResponse)
def get_orders_by_user(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    orders = order_service.list_orders(db, user_id=current_user.id)
    return OrdersResponse(message="User orders retrieved successfully", orders=[_order_to_out(o) for o in orders])

# Create an order from the checkout snapshot; payment is recorded separately
@router.post("/create", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order_without_payment(
    payload: OrderCreatePayload,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        order = order_service.create_order(db, current_user.id, payload)
    except ShopError as e:
        _fail(db, current_user, request, "ORDER_CREATE", e, {"items": len(payload.items or [])})
        raise

    out = _order_to_out(order)
    write_log(db, user_id=current_user.id, action="ORDER_CREATE", resource="orders", status="SUCCESS",
              ip=client_ip(request), meta={"order_id": out.id, "items": len(out.items), "total": out.total})
    return OrderResponse(message="Order created successfully (without payment)", order=out)

# Get details of a specific order (owner or admin)
@router.get("/{order_id}", response_model=OrderDetailResponse)
def get_order_by_id(
    order_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    order = order_service.get_order_for_user(db, order_id, current_user)
    return OrderDetailResponse(order=_order_to_out(order))

# Record payment for an order and move it to Processing
@router.put("/{order_id}/payment", response_model=OrderResponse)
def add_payment_to_order(
    order_id: str,
    payload: PaymentPayload,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    meta = {"order_id": order_id, "method": payload.method.value}
    try:
        order = order_service.add_payment(db, order_id, payload.method, payload.transaction_id)
    except ShopError as e:
        _fail(db, current_user, request, "ORDER_PAYMENT", e, meta)
        raise

    out = _order_to_out(order)
    write_log(db, user_id=current_user.id, action="ORDER_PAYMENT", resource="orders", status="SUCCESS",
              ip=client_ip(request), meta={**meta, "transaction_id": out.payment.transaction_id})
    return OrderResponse(message="Payment added successfully", order=out)

# Manually update order status (Admin only); any status may follow any other
@router.put("/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: str,
    payload: OrderStatusPatch,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(role_required("admin"))
):
    try:
        order = order_service.update_status(db, order_id, payload.status)
    except ShopError as e:
        _fail(db, current_user, request, "ORDER_STATUS_CHANGE", e, {"order_id": order_id, "new": payload.status})
        raise

    out = _order_to_out(order)
    write_log(db, user_id=current_user.id, action="ORDER_STATUS_CHANGE", resource="orders", status="SUCCESS",
              ip=client_ip(request), meta={"order_id": order_id, "new": out.status.value})
    return OrderResponse(message="Order status updated successfully", order=out)
