# backend/services/cart_service.py
"""Cart mutation rules.

Stock is checked against the live product on every mutating call and is
never reserved: the ceiling is "what the catalog says right now". All
checks run before the cart is touched, so a rejected call leaves the cart
exactly as it was.
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session, selectinload

from models.cart import Cart, CartItem, CartVariant
from models.product import Product, ProductSize
from utils.errors import NotFoundError, InvalidSizeError, InsufficientStockError, InvalidActionError

logger = logging.getLogger(__name__)

INCREMENT = "increment"
DECREMENT = "decrement"


def get_cart(db: Session, user_id: int) -> Optional[Cart]:
    return (
        db.query(Cart)
        .options(
            selectinload(Cart.items).selectinload(CartItem.variants),
            selectinload(Cart.items).selectinload(CartItem.product).selectinload(Product.sizes),
        )
        .filter(Cart.user_id == user_id)
        .first()
    )


def _get_or_create_cart(db: Session, user_id: int) -> Cart:
    cart = get_cart(db, user_id)
    if not cart:
        # Cart id mirrors the owner's id
        cart = Cart(id=user_id, user_id=user_id, items=[])
        db.add(cart)
    return cart


def _require_cart(db: Session, user_id: int) -> Cart:
    cart = get_cart(db, user_id)
    if not cart:
        raise NotFoundError("Cart not found")
    return cart


def _resolve_size(db: Session, product_id: int, size: str) -> ProductSize:
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise NotFoundError("Product not found")
    size_record = product.find_size(size)
    if not size_record:
        raise InvalidSizeError(size)
    return size_record


def _save(db: Session, cart: Cart) -> Cart:
    db.commit()
    db.refresh(cart)
    return cart


def add_item(db: Session, user_id: int, product_id: int, size: str, quantity: int) -> Cart:
    """Add ``quantity`` of one size, merging into an existing item/variant."""
    size_record = _resolve_size(db, product_id, size)
    if quantity > size_record.stock:
        raise InsufficientStockError(size, size_record.stock)

    cart = _get_or_create_cart(db, user_id)
    item = cart.find_item(product_id)

    if item:
        variant = item.find_variant(size)
        if variant:
            if variant.quantity + quantity > size_record.stock:
                raise InsufficientStockError(size, size_record.stock - variant.quantity)
            variant.quantity += quantity
        else:
            item.variants.append(CartVariant(size=size, quantity=quantity))
    else:
        cart.items.append(
            CartItem(product_id=product_id, variants=[CartVariant(size=size, quantity=quantity)])
        )

    logger.debug("Cart %s: +%s x %s/%s", cart.id, quantity, product_id, size)
    return _save(db, cart)


def update_quantity(db: Session, user_id: int, product_id: int, size: str, action: str) -> Cart:
    """Step one size of a cart item up or down by one unit."""
    cart = _require_cart(db, user_id)
    item = cart.find_item(product_id)
    if not item:
        raise NotFoundError("Product not in cart")
    variant = item.find_variant(size)
    if not variant:
        raise NotFoundError("Product size not in cart")

    if action == INCREMENT:
        size_record = _resolve_size(db, product_id, size)
        if variant.quantity + 1 > size_record.stock:
            raise InsufficientStockError(size, size_record.stock)
        variant.quantity += 1
    elif action == DECREMENT:
        if variant.quantity - 1 <= 0:
            item.variants.remove(variant)
        else:
            variant.quantity -= 1
    else:
        raise InvalidActionError(action)

    if not item.variants:
        cart.items.remove(item)

    return _save(db, cart)


def remove_item(db: Session, user_id: int, product_id: int, size: str) -> Cart:
    """Drop one size of a product; a size that is not in the cart is ignored."""
    cart = _require_cart(db, user_id)
    item = cart.find_item(product_id)
    if not item:
        raise NotFoundError("Product not in cart")

    variant = item.find_variant(size)
    if variant:
        item.variants.remove(variant)
    if not item.variants:
        cart.items.remove(item)

    return _save(db, cart)


def clear_cart(db: Session, user_id: int) -> Cart:
    cart = _require_cart(db, user_id)
    cart.items.clear()
    return _save(db, cart)
