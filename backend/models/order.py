# backend/models/order.py
import enum
from sqlalchemy import Column, Integer, String, Float, Boolean, ForeignKey, DateTime, Enum, func
from sqlalchemy.orm import relationship
from database import Base


def _enum_values(enum_cls):
    # Persist the display value ("Pending"), not the member name
    return [member.value for member in enum_cls]


# Order lifecycle states. Any state may follow any other.
class OrderStatus(str, enum.Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"
    RETURNED = "Returned"


class PaymentStatus(str, enum.Enum):
    PENDING = "Pending"
    PAID = "Paid"
    FAILED = "Failed"
    REFUNDED = "Refunded"


class PaymentMethod(str, enum.Enum):
    CARD = "Card"
    PAYPAL = "PayPal"
    GOOGLE_PAY = "GooglePay"
    WALLET = "Wallet"
    COD = "COD"


# Order snapshot. Items and shipping address never change after creation;
# status and the payment columns do.
class Order(Base):
    __tablename__ = "orders"

    # "Order_01", "Order_02", ... issued by services.order_numbering
    id = Column(String, primary_key=True)
    # Numeric part of the id; "Order_100" sorts before "Order_99" as text
    seq = Column(Integer, unique=True, index=True, nullable=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), index=True, nullable=True)

    status = Column(
        Enum(OrderStatus, values_callable=_enum_values, native_enum=False),
        nullable=False, default=OrderStatus.PENDING, index=True
    )

    # Payment sub-record
    payment_method = Column(
        Enum(PaymentMethod, values_callable=_enum_values, native_enum=False),
        nullable=False, default=PaymentMethod.COD
    )
    payment_status = Column(
        Enum(PaymentStatus, values_callable=_enum_values, native_enum=False),
        nullable=False, default=PaymentStatus.PENDING
    )
    payment_transaction_id = Column(String, nullable=True)

    # Amounts as computed at checkout
    subtotal = Column(Float, nullable=False)
    shipping_fee = Column(Float, nullable=False, default=0)
    total = Column(Float, nullable=False)

    # Shipping address details
    shipping_full_name = Column(String, nullable=False)
    shipping_phone_number = Column(String, nullable=False)
    shipping_email = Column(String, nullable=False)
    shipping_street = Column(String, nullable=False)
    shipping_city = Column(String, nullable=False)
    shipping_province = Column(String, nullable=False)
    shipping_postal_code = Column(String, nullable=False)
    shipping_country = Column(String, nullable=False)

    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    items = relationship(
        "OrderItem", back_populates="order",
        cascade="all, delete-orphan", order_by="OrderItem.id"
    )
    user = relationship("User")


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(String, ForeignKey("orders.id"), index=True, nullable=False)
    # Plain reference: the snapshot outlives catalog changes
    product_id = Column(Integer, nullable=False, index=True)
    size = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)

    order = relationship("Order", back_populates="items")
    product = relationship(
        "Product",
        primaryjoin="foreign(OrderItem.product_id) == Product.id",
        viewonly=True,
    )
