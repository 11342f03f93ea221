# utils/tokenJWT.py
from jose import jwt, JWTError
from datetime import datetime, timedelta, timezone
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from models.users import User
from utils.errors import ForbiddenError

# Authorization scheme; tokens are issued by the identity service
bearer_scheme = HTTPBearer()

# Generate a signed access token (used by tooling and tests)
def create_access_token(data: dict, expires_delta: timedelta = None):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

# Retrieve the currently authenticated user based on the JWT token
def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> User:
    token = credentials.credentials
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        email: str = payload.get("sub")
        # Ensure email is present in the token payload
        if email is None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception

    user = db.query(User).filter(User.email == email).first()
    if user is None:
        raise credentials_exception
    if not user.is_active:
        raise ForbiddenError("Account is inactive")
    return user

def is_admin(user: User) -> bool:
    return (user.role or "").lower() == "admin"

# Dependency factory for Role-Based Access Control
def role_required(*allowed_roles):
    def _checker(current_user: User = Depends(get_current_user)):
        if allowed_roles and (current_user.role or "").lower() not in allowed_roles:
            raise ForbiddenError("Admin access required" if allowed_roles == ("admin",) else "Forbidden")
        return current_user
    return _checker
