# backend/schemas/user.py
from typing import Optional
from datetime import datetime

from schemas.base import ORMBase

# Output schema for user account details (admin views)
class UserResponse(ORMBase):
    id: int
    email: str
    role: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None

class MessageResponse(ORMBase):
    message: str

class ToggleActiveResponse(ORMBase):
    message: str
    is_active: bool
