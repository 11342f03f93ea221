"""Pytest fixtures: in-memory database, API client, users and catalog."""

import os

# Must be set before the application modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db
from main import app
from models.product import Product, ProductSize
from models.users import User
from utils.payment_gateway import reset_gateway
from utils.tokenJWT import create_access_token


@pytest.fixture
def engine():
    """One shared in-memory SQLite connection per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    reset_gateway()


@pytest.fixture
def make_user(db_session):
    """Factory creating a persisted user."""
    counter = {"n": 0}

    def _make(role="customer", email=None, is_active=True):
        counter["n"] += 1
        user = User(
            email=email or f"user{counter['n']}@example.com",
            role=role,
            first_name="Test",
            last_name=f"User{counter['n']}",
            is_active=is_active,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make


@pytest.fixture
def customer(make_user):
    return make_user()


@pytest.fixture
def admin(make_user):
    return make_user(role="admin", email="admin@example.com")


def auth_headers(user):
    token = create_access_token({"sub": user.email, "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def customer_headers(customer):
    return auth_headers(customer)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def make_product(db_session):
    """Factory creating a product with per-size stock, e.g. sizes={"M": 3}."""

    def _make(name="Classic Tee", price=2500.0, sizes=None):
        sizes = {"M": 3} if sizes is None else sizes
        product = Product(
            name=name,
            price=price,
            category="T-Shirts",
            sizes=[ProductSize(size=s, stock=q) for s, q in sizes.items()],
        )
        db_session.add(product)
        db_session.commit()
        db_session.refresh(product)
        return product

    return _make


@pytest.fixture
def shipping_address():
    return {
        "fullName": "Nimal Perera",
        "phoneNumber": "0771234567",
        "email": "nimal@example.com",
        "street": "12 Temple Road",
        "city": "Kandy",
        "province": "Central",
        "postalCode": "20000",
        "country": "Sri Lanka",
    }


@pytest.fixture
def headers_for():
    """Build bearer headers for any user created in a test."""
    return auth_headers
