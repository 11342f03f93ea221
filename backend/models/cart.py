# backend/models/cart.py
from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Boolean, UniqueConstraint, CheckConstraint, func
from sqlalchemy.orm import relationship
from database import Base

# The user's shopping cart. Its id is the owner's user id (one cart per user).
class Cart(Base):
    __tablename__ = "carts"

    id = Column(Integer, primary_key=True, autoincrement=False)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, index=True, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # One-to-many relationship with cart items
    items = relationship(
        "CartItem", back_populates="cart",
        cascade="all, delete-orphan", order_by="CartItem.id"
    )

    def find_item(self, product_id: int):
        return next((i for i in self.items if i.product_id == product_id), None)


# One product in a cart; the sizes picked for it are its variants
class CartItem(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True, index=True)
    cart_id = Column(Integer, ForeignKey("carts.id"), index=True, nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), index=True, nullable=False)

    cart = relationship("Cart", back_populates="items")
    product = relationship("Product")
    variants = relationship(
        "CartVariant", back_populates="item",
        cascade="all, delete-orphan", order_by="CartVariant.id"
    )

    __table_args__ = (
        # A product appears at most once per cart; sizes are merged into variants
        UniqueConstraint("cart_id", "product_id", name="uq_cartitem_cart_product"),
    )

    def find_variant(self, size: str):
        return next((v for v in self.variants if v.size == size), None)


# Size selection within a cart item
class CartVariant(Base):
    __tablename__ = "cart_variants"

    id = Column(Integer, primary_key=True, index=True)
    item_id = Column(Integer, ForeignKey("cart_items.id"), index=True, nullable=False)
    size = Column(String, nullable=False)
    quantity = Column(Integer, CheckConstraint("quantity >= 1"), nullable=False, default=1)

    item = relationship("CartItem", back_populates="variants")

    __table_args__ = (
        UniqueConstraint("item_id", "size", name="uq_cartvariant_item_size"),
    )
