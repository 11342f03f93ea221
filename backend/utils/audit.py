# backend/utils/audit.py
import logging
from typing import Optional

from fastapi import Request
from sqlalchemy.orm import Session
from models.log import Log

logger = logging.getLogger("audit")

SUCCESS = "SUCCESS"
FAIL = "FAIL"

def client_ip(request: Request) -> Optional[str]:
    if request is None:
        return None
    # Behind a proxy the first forwarded address is the real client
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None

# Persist one audit entry; commits, so call it after the business change is saved or rolled back
def write_log(db: Session, *, user_id, action, resource, status=SUCCESS, ip=None, meta=None):
    entry = Log(user_id=user_id, action=action, resource=resource, status=status, ip=ip, meta=meta or {})
    db.add(entry)
    db.commit()
    if status == FAIL:
        logger.info("%s on %s failed for user %s: %s", action, resource, user_id, (meta or {}).get("reason"))
