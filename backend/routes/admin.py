# backend/routes/admin.py
from fastapi import APIRouter, Depends, Request
from typing import List
from sqlalchemy.orm import Session

from database import get_db
from models.users import User
from models.cart import Cart
from models.wishlist import Wishlist
from models.order import Order
from models.log import Log
from utils.tokenJWT import role_required
from utils.audit import write_log, client_ip
from utils.errors import NotFoundError, ValidationError
from schemas.user import UserResponse, MessageResponse, ToggleActiveResponse

router = APIRouter(prefix="/users", tags=["Admin"])

def _get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    return user


# Retrieve every user account (Admin only)
@router.get("", response_model=List[UserResponse])
def get_all_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(role_required("admin"))
):
    return db.query(User).order_by(User.id.asc()).all()


# Retrieve a single user account (Admin only)
@router.get("/{user_id}", response_model=UserResponse)
def get_user_by_id(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(role_required("admin"))
):
    return _get_user(db, user_id)


# Delete a user account together with its cart and wishlist (Admin only)
@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(role_required("admin"))
):
    user = _get_user(db, user_id)

    # Prevent self-deletion
    if user.id == current_user.id:
        raise ValidationError("You cannot delete your own account")

    # Orders and audit entries stay as history, unlinked: SQLite hands a deleted id to the next user
    db.query(Order).filter(Order.user_id == user.id).update({Order.user_id: None}, synchronize_session=False)
    db.query(Log).filter(Log.user_id == user.id).update({Log.user_id: None}, synchronize_session=False)
    for owned in (db.query(Cart).filter(Cart.user_id == user.id).first(),
                  db.query(Wishlist).filter(Wishlist.user_id == user.id).first()):
        if owned is not None:
            db.delete(owned)
    db.delete(user)
    db.commit()

    write_log(db, user_id=current_user.id, action="USER_DELETE", resource="users", status="SUCCESS",
              ip=client_ip(request), meta={"deleted_user_id": user_id})
    return {"message": f"User {user_id} deleted successfully"}


# Activate or deactivate an account (Admin only)
@router.patch("/toggle-active/{user_id}", response_model=ToggleActiveResponse)
def toggle_user_active(
    user_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(role_required("admin"))
):
    user = _get_user(db, user_id)
    user.is_active = not user.is_active
    db.commit()
    is_active = user.is_active

    write_log(db, user_id=current_user.id, action="USER_TOGGLE_ACTIVE", resource="users", status="SUCCESS",
              ip=client_ip(request), meta={"target_user_id": user_id, "is_active": is_active})
    return ToggleActiveResponse(
        message=f"User {user_id} is now {'active' if is_active else 'inactive'}",
        is_active=is_active,
    )
