# backend/services/order_service.py
"""Order creation, payment recording and status changes.

Every operation is an independent write with no transition graph: payment
confirmation always moves an order to Processing, and an administrator may
set any status after any other.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from config import settings
from models.order import Order, OrderItem, OrderStatus, PaymentMethod, PaymentStatus
from models.product import Product
from models.users import User
from schemas.order import OrderCreatePayload, OrderItemIn
from services.order_numbering import assign_order_id
from utils.errors import ValidationError, NotFoundError, InvalidSizeError, InsufficientStockError, PaymentFailedError
from utils.payment_gateway import PaymentGateway, PaymentError, get_gateway
from utils.tokenJWT import is_admin

logger = logging.getLogger(__name__)

ALLOWED_STATUSES = [s.value for s in OrderStatus]


def _order_query(db: Session):
    return db.query(Order).options(
        selectinload(Order.items).selectinload(OrderItem.product),
    )


def _load_products(db: Session, items: List[OrderItemIn]) -> dict:
    ids = {it.product for it in items}
    products = db.query(Product).filter(Product.id.in_(ids)).all()
    return {p.id: p for p in products}


def _validate_stock(db: Session, items: List[OrderItemIn]) -> None:
    # Optimistic re-check against current stock; nothing is reserved
    products = _load_products(db, items)
    requested = {}
    for it in items:
        requested[(it.product, it.size)] = requested.get((it.product, it.size), 0) + it.quantity

    for (product_id, size), quantity in requested.items():
        product = products.get(product_id)
        if not product:
            raise NotFoundError("Product not found")
        size_record = product.find_size(size)
        if not size_record:
            raise InvalidSizeError(size)
        if quantity > size_record.stock:
            raise InsufficientStockError(size, size_record.stock)


def compute_totals(db: Session, items: List[OrderItemIn]):
    """Subtotal from current catalog prices, shipping from the configured tariff."""
    products = _load_products(db, items)
    subtotal = 0.0
    for it in items:
        product = products.get(it.product)
        if not product:
            raise NotFoundError("Product not found")
        subtotal += product.price * it.quantity

    subtotal = round(subtotal, 2)
    shipping_fee = 0.0 if subtotal >= settings.FREE_SHIPPING_THRESHOLD else settings.SHIPPING_COST
    return subtotal, shipping_fee, round(subtotal + shipping_fee, 2)


def create_order(db: Session, user_id: int, payload: OrderCreatePayload) -> Order:
    """Persist a Pending/COD order from the client's checkout snapshot."""
    if not payload.items:
        raise ValidationError("Order items are required")

    if settings.VALIDATE_STOCK_ON_ORDER:
        _validate_stock(db, payload.items)

    subtotal, shipping_fee, total = payload.subtotal, payload.shipping_fee, payload.total
    if settings.RECOMPUTE_ORDER_TOTALS:
        subtotal, shipping_fee, total = compute_totals(db, payload.items)
        if total != payload.total:
            logger.warning(
                "Client total %.2f replaced by recomputed %.2f for user %s",
                payload.total, total, user_id,
            )

    address = payload.shipping_address
    now = datetime.now(timezone.utc)
    order = Order(
        user_id=user_id,
        status=OrderStatus.PENDING,
        payment_method=PaymentMethod.COD,
        payment_status=PaymentStatus.PENDING,
        subtotal=subtotal,
        shipping_fee=shipping_fee,
        total=total,
        shipping_full_name=address.full_name,
        shipping_phone_number=address.phone_number,
        shipping_email=address.email,
        shipping_street=address.street,
        shipping_city=address.city,
        shipping_province=address.province,
        shipping_postal_code=address.postal_code,
        shipping_country=address.country,
        created_at=now,
        updated_at=now,
        items=[OrderItem(product_id=it.product, size=it.size, quantity=it.quantity) for it in payload.items],
    )
    assign_order_id(db, order)
    db.add(order)
    db.commit()

    logger.info("Order %s created for user %s (%d items, total %.2f)", order.id, user_id, len(payload.items), total)
    return get_order(db, order.id)


def get_order(db: Session, order_id: str) -> Order:
    order = _order_query(db).filter(Order.id == order_id).first()
    if not order:
        raise NotFoundError("Order not found")
    return order


def get_order_for_user(db: Session, order_id: str, user: User) -> Order:
    # Other customers' orders look exactly like missing ones
    order = get_order(db, order_id)
    if order.user_id != user.id and not is_admin(user):
        raise NotFoundError("Order not found")
    return order


def list_orders(db: Session, user_id: Optional[int] = None) -> List[Order]:
    query = _order_query(db)
    if user_id is not None:
        query = query.filter(Order.user_id == user_id)
    return query.order_by(Order.created_at.desc(), Order.seq.desc()).all()


def add_payment(
    db: Session,
    order_id: str,
    method: PaymentMethod,
    transaction_id: Optional[str] = None,
    gateway: Optional[PaymentGateway] = None,
) -> Order:
    """Charge through the gateway and record the outcome on the order."""
    order = get_order(db, order_id)
    gateway = gateway or get_gateway()

    try:
        receipt = gateway.charge(order, method.value, transaction_id)
    except PaymentError as e:
        order.payment_method = method
        order.payment_status = PaymentStatus.FAILED
        order.payment_transaction_id = transaction_id
        db.commit()
        logger.warning("Payment for order %s declined: %s", order_id, e.reason)
        raise PaymentFailedError(e.reason)

    order.payment_method = method
    order.payment_status = PaymentStatus.PAID
    order.payment_transaction_id = receipt.transaction_id
    order.status = OrderStatus.PROCESSING
    db.commit()
    return get_order(db, order_id)


def update_status(db: Session, order_id: str, status: str) -> Order:
    if status not in ALLOWED_STATUSES:
        raise ValidationError("Invalid status")

    order = get_order(db, order_id)
    previous = order.status
    order.status = OrderStatus(status)
    db.commit()
    logger.info("Order %s status %s -> %s", order_id, previous.value, status)
    return get_order(db, order_id)
