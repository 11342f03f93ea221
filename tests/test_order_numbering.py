"""Tests for sequential order identifiers."""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from database import Base
from models.counter import Counter
from models.order import Order
from models.users import User
from schemas.order import OrderCreatePayload
from services import order_service
from services.order_numbering import ORDER_COUNTER, assign_order_id, format_order_id, next_sequence


class TestFormatOrderId:
    def test_two_digit_minimum(self):
        assert format_order_id(1) == "Order_01"
        assert format_order_id(9) == "Order_09"
        assert format_order_id(42) == "Order_42"

    def test_wider_numbers_are_not_truncated(self):
        assert format_order_id(100) == "Order_100"
        assert format_order_id(12345) == "Order_12345"


class TestNextSequence:
    def test_first_use_creates_counter(self, db_session):
        assert next_sequence(db_session, "test") == 1
        db_session.commit()
        assert db_session.get(Counter, "test").seq == 1

    def test_values_strictly_increase(self, db_session):
        values = [next_sequence(db_session, ORDER_COUNTER) for _ in range(5)]
        assert values == [1, 2, 3, 4, 5]

    def test_counters_are_independent(self, db_session):
        next_sequence(db_session, "a")
        next_sequence(db_session, "a")
        assert next_sequence(db_session, "b") == 1
        assert next_sequence(db_session, "a") == 3

    def test_continues_from_existing_row(self, db_session):
        db_session.add(Counter(name=ORDER_COUNTER, seq=99))
        db_session.commit()
        assert format_order_id(next_sequence(db_session, ORDER_COUNTER)) == "Order_100"

    def test_visible_across_sessions(self, session_factory):
        first, second = session_factory(), session_factory()
        try:
            assert next_sequence(first, ORDER_COUNTER) == 1
            first.commit()
            assert next_sequence(second, ORDER_COUNTER) == 2
            second.commit()
        finally:
            first.close()
            second.close()


class TestAssignOrderId:
    def test_assigns_once(self, db_session):
        order = Order()
        assert assign_order_id(db_session, order) == "Order_01"
        assert assign_order_id(db_session, order) == "Order_01"
        assert order.seq == 1
        assert next_sequence(db_session, ORDER_COUNTER) == 2


def _order(seq, created_at):
    return Order(
        id=format_order_id(seq), seq=seq, subtotal=0, total=0,
        shipping_full_name="A", shipping_phone_number="1", shipping_email="a@example.com",
        shipping_street="S", shipping_city="C", shipping_province="P",
        shipping_postal_code="0", shipping_country="LK", created_at=created_at,
    )


class TestListOrdering:
    def test_same_timestamp_sorted_by_number(self, db_session):
        created = datetime(2026, 1, 1, tzinfo=timezone.utc)
        db_session.add_all([_order(99, created), _order(100, created), _order(9, created)])
        db_session.commit()

        ids = [o.id for o in order_service.list_orders(db_session)]
        assert ids == ["Order_100", "Order_99", "Order_09"]


class TestConcurrentCreation:
    THREADS = 20

    @pytest.fixture
    def file_sessions(self, tmp_path):
        # Real file database: every thread gets its own connection
        engine = create_engine(
            f"sqlite:///{tmp_path / 'orders.db'}",
            connect_args={"check_same_thread": False, "timeout": 30},
        )
        Base.metadata.create_all(bind=engine)
        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
        engine.dispose()

    def test_ids_distinct_and_contiguous(self, file_sessions, shipping_address):
        with file_sessions() as db:
            user = User(email="buyer@example.com", role="customer")
            db.add(user)
            db.commit()
            user_id = user.id

        payload = OrderCreatePayload.model_validate({
            "items": [{"product": 1, "size": "M", "quantity": 1}],
            "shippingAddress": shipping_address,
            "subtotal": 2500.0,
            "shippingFee": 350.0,
            "total": 2850.0,
        })

        def create(_):
            with file_sessions() as db:
                order = order_service.create_order(db, user_id, payload)
                return order.seq, order.id

        with ThreadPoolExecutor(max_workers=self.THREADS) as pool:
            results = list(pool.map(create, range(self.THREADS)))

        seqs = sorted(seq for seq, _ in results)
        assert seqs == list(range(1, self.THREADS + 1))
        assert sorted(order_id for _, order_id in results) == sorted(format_order_id(s) for s in seqs)

        with file_sessions() as db:
            assert db.get(Counter, ORDER_COUNTER).seq == self.THREADS
