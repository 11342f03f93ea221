# backend/models/log.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON, Index, func
from database import Base

# Audit trail entry: who did what to which resource, and whether it worked.
# Kept after the acting user is deleted; user_id is then cleared.
class Log(Base):
    __tablename__ = "logs"

    id = Column(Integer, primary_key=True, index=True)
    ts = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    action = Column(String(50), index=True)
    resource = Column(String(50), index=True)
    status = Column(String(20), index=True)  # SUCCESS / FAIL
    ip = Column(String(64), nullable=True)

    # Action-specific context (product id, sizes, order id, failure reason)
    meta = Column(JSON, nullable=True)

    __table_args__ = (
        # The admin log view filters by resource and lists newest first
        Index("ix_logs_resource_ts", "resource", "ts"),
    )
