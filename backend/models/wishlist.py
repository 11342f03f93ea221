# backend/models/wishlist.py
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Table, func
from sqlalchemy.orm import relationship
from database import Base

# Association table: products saved on a wishlist
wishlist_products = Table(
    "wishlist_products",
    Base.metadata,
    Column("wishlist_id", String, ForeignKey("wishlists.id"), primary_key=True),
    Column("product_id", Integer, ForeignKey("products.id"), primary_key=True),
)

# Per-user wishlist, id is "wishlist_<user id>"
class Wishlist(Base):
    __tablename__ = "wishlists"

    id = Column(String, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    products = relationship("Product", secondary=wishlist_products, order_by="Product.id")
