# backend/routes/logs.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional, Any
from datetime import date, datetime, time, timedelta

from database import get_db
from models.log import Log
from models.users import User
from schemas.base import ORMBase
from utils.tokenJWT import role_required

router = APIRouter(prefix="/logs", tags=["Logs"])

# --- SCHEMAS ---
class LogResponse(ORMBase):
    id: int
    user_id: Optional[int] = None
    action: str
    resource: str
    status: str
    ip: Optional[str] = None
    ts: datetime
    meta: Optional[Any] = None

class LogPage(ORMBase):
    items: List[LogResponse]
    total: int
    page: int
    page_size: int

# --- ENDPOINT ---
# Audit trail for administrators, newest first
@router.get("", response_model=LogPage)
def get_logs(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100, alias="pageSize"),
    action: Optional[str] = Query(None, description="Filter by action, e.g. CART_ADD"),
    user_id: Optional[int] = Query(None, alias="userId", description="Filter by acting user"),
    resource: Optional[str] = Query(None, description="Filter by resource (cart, orders, ...)"),
    status: Optional[str] = Query(None, description="SUCCESS or FAIL"),
    date_from: Optional[date] = Query(None, alias="dateFrom", description="First day, YYYY-MM-DD"),
    date_to: Optional[date] = Query(None, alias="dateTo", description="Last day (inclusive), YYYY-MM-DD"),
    db: Session = Depends(get_db),
    current_user: User = Depends(role_required("admin")),
):
    query = db.query(Log)

    if action:
        query = query.filter(Log.action.ilike(f"%{action}%"))
    if user_id is not None:
        query = query.filter(Log.user_id == user_id)
    if resource:
        query = query.filter(Log.resource.ilike(f"%{resource}%"))
    if status:
        query = query.filter(Log.status == status.upper())
    if date_from:
        query = query.filter(Log.ts >= datetime.combine(date_from, time.min))
    if date_to:
        # Whole last day
        query = query.filter(Log.ts < datetime.combine(date_to + timedelta(days=1), time.min))

    query = query.order_by(Log.ts.desc(), Log.id.desc())

    total = query.count()
    logs = query.offset((page - 1) * page_size).limit(page_size).all()

    return {
        "items": logs,
        "total": total,
        "page": page,
        "page_size": page_size,
    }
