# backend/routes/cart.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from database import get_db
from utils.tokenJWT import get_current_user
from utils.audit import write_log, client_ip
from utils.errors import ShopError
from models.users import User
from models.cart import Cart
from schemas.cart import CartAddItem, CartRemoveItem, CartUpdateQuantity, CartOut, CartItemOut, CartVariantOut, CartResponse
from schemas.product import ProductOut
from services import cart_service

router = APIRouter(prefix="/cart", tags=["Cart"])

def _cart_to_out(cart: Cart) -> CartOut:
    items_out = []
    for it in cart.items:
        items_out.append(CartItemOut(
            product_id=it.product_id,
            # Product may have been removed from the catalog since it was added
            product=ProductOut.model_validate(it.product) if it.product else None,
            variants=[CartVariantOut(size=v.size, quantity=v.quantity) for v in it.variants],
        ))
    return CartOut(id=cart.id, user_id=cart.user_id, items=items_out, is_active=cart.is_active)

def _variant_count(cart: Cart) -> int:
    return sum(len(it.variants) for it in cart.items)

def _log_failure(db: Session, user: User, request: Request, action: str, error: ShopError, meta: dict):
    # Discard whatever the failed call left in the session before writing the entry
    db.rollback()
    write_log(
        db,
        user_id=user.id,
        action=action,
        resource="cart",
        status="FAIL",
        ip=client_ip(request),
        meta={**meta, "reason": error.message},
    )

@router.get("", response_model=CartResponse)
def get_cart(
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    cart = cart_service.get_cart(db, current_user.id)
    # A user who never added anything gets an empty placeholder, not a 404
    out = _cart_to_out(cart) if cart else CartOut(items=[])

    write_log(
        db,
        user_id=current_user.id,
        action="CART_VIEW",
        resource="cart",
        status="SUCCESS",
        ip=client_ip(request),
        meta={"items": len(out.items)},
    )
    return CartResponse(message="Cart retrieved successfully", cart=out)

@router.post("/add", response_model=CartResponse)
def add_to_cart(
    payload: CartAddItem,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    meta = {"product_id": payload.product_id, "size": payload.size, "quantity": payload.quantity}
    try:
        cart = cart_service.add_item(db, current_user.id, payload.product_id, payload.size, payload.quantity)
    except ShopError as e:
        _log_failure(db, current_user, request, "CART_ADD", e, meta)
        raise

    out = _cart_to_out(cart)
    write_log(
        db,
        user_id=current_user.id,
        action="CART_ADD",
        resource="cart",
        status="SUCCESS",
        ip=client_ip(request),
        meta={**meta, "cart_items": len(out.items)},
    )
    return CartResponse(message="Product added to cart successfully", cart=out)

@router.post("/remove", response_model=CartResponse)
def remove_from_cart(
    payload: CartRemoveItem,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    meta = {"product_id": payload.product_id, "size": payload.size}
    try:
        cart = cart_service.remove_item(db, current_user.id, payload.product_id, payload.size)
    except ShopError as e:
        _log_failure(db, current_user, request, "CART_REMOVE", e, meta)
        raise

    out = _cart_to_out(cart)
    write_log(
        db,
        user_id=current_user.id,
        action="CART_REMOVE",
        resource="cart",
        status="SUCCESS",
        ip=client_ip(request),
        meta={**meta, "cart_items": len(out.items)},
    )
    return CartResponse(message="Product removed from cart successfully", cart=out)

@router.post("/update-quantity", response_model=CartResponse)
def update_cart_item_quantity(
    payload: CartUpdateQuantity,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    meta = {"product_id": payload.product_id, "size": payload.size, "action": payload.action}
    try:
        cart = cart_service.update_quantity(db, current_user.id, payload.product_id, payload.size, payload.action)
    except ShopError as e:
        _log_failure(db, current_user, request, "CART_UPDATE", e, meta)
        raise

    out = _cart_to_out(cart)
    write_log(
        db,
        user_id=current_user.id,
        action="CART_UPDATE",
        resource="cart",
        status="SUCCESS",
        ip=client_ip(request),
        meta={**meta, "variants": _variant_count(cart)},
    )
    return CartResponse(message="Cart updated successfully", cart=out)

@router.post("/clear", response_model=CartResponse)
def clear_cart(
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        cart = cart_service.clear_cart(db, current_user.id)
    except ShopError as e:
        _log_failure(db, current_user, request, "CART_CLEAR", e, {})
        raise

    out = _cart_to_out(cart)
    write_log(
        db,
        user_id=current_user.id,
        action="CART_CLEAR",
        resource="cart",
        status="SUCCESS",
        ip=client_ip(request),
    )
    return CartResponse(message="Cart cleared successfully", cart=out)
