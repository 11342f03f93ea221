# backend/services/order_numbering.py
"""Sequential, human-readable order identifiers (Order_01, Order_02, ...).

The sequence lives in a single ``counters`` row. Incrementing and reading it
back is one ``UPDATE ... RETURNING`` statement, so two transactions creating
orders at the same time can never be handed the same number.
"""
import logging

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.counter import Counter

logger = logging.getLogger(__name__)

ORDER_COUNTER = "order"
ORDER_PREFIX = "Order_"


def format_order_id(seq: int) -> str:
    # Minimum width only: 100 stays "Order_100"
    return f"{ORDER_PREFIX}{seq:02d}"


def next_sequence(db: Session, name: str) -> int:
    """Atomically increment counter ``name`` and return the new value.

    The counter row is created on first use. If another transaction inserts it
    first, the unique key rejects our insert and we fall back to incrementing
    the row it created.
    """
    stmt = (
        update(Counter)
        .where(Counter.name == name)
        .values(seq=Counter.seq + 1)
        .returning(Counter.seq)
        .execution_options(synchronize_session=False)
    )
    seq = db.execute(stmt).scalar_one_or_none()
    if seq is not None:
        return seq

    try:
        with db.begin_nested():
            db.add(Counter(name=name, seq=1))
        logger.info("Created counter %r", name)
        return 1
    except IntegrityError:
        return db.execute(stmt).scalar_one()


def assign_order_id(db: Session, order) -> str:
    # Issued once; an order that already has an id keeps it
    if not order.id:
        order.seq = next_sequence(db, ORDER_COUNTER)
        order.id = format_order_id(order.seq)
    return order.id
