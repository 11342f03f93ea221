# backend/models/product.py
from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, CheckConstraint, UniqueConstraint, func
from sqlalchemy.orm import relationship
from database import Base

# Catalog product. Stock is tracked per size, not on the product itself.
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(String)
    category = Column(String, index=True)

    price = Column(Float, CheckConstraint("price >= 0"), nullable=False)

    # Optional product image URL
    image_url = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    sizes = relationship(
        "ProductSize", back_populates="product",
        cascade="all, delete-orphan", order_by="ProductSize.id"
    )

    def find_size(self, size: str):
        return next((s for s in self.sizes if s.size == size), None)


# Available-to-sell count for a single size of a product
class ProductSize(Base):
    __tablename__ = "product_sizes"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), index=True, nullable=False)
    size = Column(String, nullable=False)
    stock = Column(Integer, CheckConstraint("stock >= 0"), nullable=False, default=0)

    product = relationship("Product", back_populates="sizes")

    __table_args__ = (
        UniqueConstraint("product_id", "size", name="uq_productsize_product_size"),
    )
