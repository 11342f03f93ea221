# backend/models/counter.py
from sqlalchemy import Column, Integer, String
from database import Base

# Named sequence, incremented atomically (e.g. "order" for order numbers)
class Counter(Base):
    __tablename__ = "counters"

    name = Column(String, primary_key=True)
    seq = Column(Integer, nullable=False, default=0)
