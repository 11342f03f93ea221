# backend/routes/wishlist.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session, selectinload

from database import get_db
from utils.tokenJWT import get_current_user
from utils.audit import write_log, client_ip
from utils.errors import NotFoundError
from models.users import User
from models.product import Product
from models.wishlist import Wishlist
from schemas.product import ProductOut
from schemas.wishlist import WishlistAdd, WishlistOut, WishlistResponse, WishlistProductsResponse

router = APIRouter(prefix="/wishlist", tags=["Wishlist"])

def _find_wishlist(db: Session, user_id: int):
    return (
        db.query(Wishlist)
        .options(selectinload(Wishlist.products).selectinload(Product.sizes))
        .filter(Wishlist.user_id == user_id)
        .first()
    )

def _wishlist_to_out(wishlist: Wishlist) -> WishlistOut:
    return WishlistOut(id=wishlist.id, user_id=wishlist.user_id, products=[p.id for p in wishlist.products])

@router.get("", response_model=WishlistProductsResponse)
def get_wishlist_products(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    wishlist = _find_wishlist(db, current_user.id)
    if not wishlist:
        raise NotFoundError("Wishlist not found")
    return WishlistProductsResponse(
        message="Wishlist retrieved successfully",
        products=[ProductOut.model_validate(p) for p in wishlist.products],
    )

@router.post("", response_model=WishlistResponse)
def add_to_wishlist(
    payload: WishlistAdd,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    product = db.query(Product).filter(Product.id == payload.product_id).first()
    if not product:
        raise NotFoundError("Product not found")

    wishlist = _find_wishlist(db, current_user.id)
    if not wishlist:
        wishlist = Wishlist(id=f"wishlist_{current_user.id}", user_id=current_user.id, products=[])
        db.add(wishlist)

    # Saving the same product twice is a no-op
    if product not in wishlist.products:
        wishlist.products.append(product)
    db.commit()

    out = _wishlist_to_out(wishlist)
    write_log(db, user_id=current_user.id, action="WISHLIST_ADD", resource="wishlist", status="SUCCESS",
              ip=client_ip(request), meta={"product_id": product.id})
    return WishlistResponse(message="Product added to wishlist successfully", wishlist=out)

@router.delete("/{product_id}", response_model=WishlistResponse)
def remove_from_wishlist(
    product_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    wishlist = _find_wishlist(db, current_user.id)
    if not wishlist:
        raise NotFoundError("Wishlist not found")

    wishlist.products = [p for p in wishlist.products if p.id != product_id]
    db.commit()

    out = _wishlist_to_out(wishlist)
    write_log(db, user_id=current_user.id, action="WISHLIST_REMOVE", resource="wishlist", status="SUCCESS",
              ip=client_ip(request), meta={"product_id": product_id})
    return WishlistResponse(message="Product removed from wishlist successfully", wishlist=out)
