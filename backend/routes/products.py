# backend/routes/products.py
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session, selectinload

from database import get_db
from utils.tokenJWT import role_required
from utils.audit import write_log, client_ip
from utils.errors import NotFoundError
from models.users import User
from models.product import Product, ProductSize
import schemas.product as product_schemas

router = APIRouter(prefix="/products", tags=["Products"])

def _get_product(db: Session, product_id: int) -> Product:
    product = db.query(Product).options(selectinload(Product.sizes)).filter(Product.id == product_id).first()
    if not product:
        raise NotFoundError("Product not found")
    return product


# =========================
# CATALOG (public)
# =========================
@router.get("", response_model=product_schemas.ProductListResponse)
def list_products(db: Session = Depends(get_db)):
    products = (
        db.query(Product)
        .options(selectinload(Product.sizes))
        .order_by(Product.created_at.desc(), Product.id.desc())
        .all()
    )
    return {
        "message": "Products retrieved successfully",
        "products": [product_schemas.ProductOut.model_validate(p) for p in products],
    }


@router.get("/{product_id}", response_model=product_schemas.ProductResponse)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return {"product": product_schemas.ProductOut.model_validate(_get_product(db, product_id))}


# =========================
# MAINTENANCE (Admin only)
# =========================
@router.post("", response_model=product_schemas.ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: product_schemas.ProductCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(role_required("admin")),
):
    product = Product(
        name=payload.name.strip(),
        description=payload.description,
        category=payload.category,
        price=payload.price,
        image_url=payload.image_url,
        sizes=[ProductSize(size=s.size, stock=s.stock) for s in payload.sizes],
    )
    db.add(product)
    db.commit()
    db.refresh(product)

    out = product_schemas.ProductOut.model_validate(product)
    write_log(db, user_id=current_user.id, action="PRODUCT_CREATE", resource="products", status="SUCCESS",
              ip=client_ip(request), meta={"product_id": out.id, "sizes": [s.size for s in out.sizes]})
    return {"message": "Product created successfully", "product": out}


# Insert or overwrite stock for the given sizes; sizes not mentioned are left as they are
@router.put("/{product_id}/sizes", response_model=product_schemas.ProductResponse)
def update_product_sizes(
    product_id: int,
    payload: product_schemas.ProductSizesUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(role_required("admin")),
):
    product = _get_product(db, product_id)
    for s in payload.sizes:
        record = product.find_size(s.size)
        if record:
            record.stock = s.stock
        else:
            product.sizes.append(ProductSize(size=s.size, stock=s.stock))
    db.commit()
    db.refresh(product)

    out = product_schemas.ProductOut.model_validate(product)
    write_log(db, user_id=current_user.id, action="PRODUCT_STOCK_UPDATE", resource="products", status="SUCCESS",
              ip=client_ip(request), meta={"product_id": product_id, "sizes": {s.size: s.stock for s in payload.sizes}})
    return {"message": "Product stock updated successfully", "product": out}
