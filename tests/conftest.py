"""
Pytest fixtures for the posadmin API.

Every test gets a fresh in-memory SQLite database (StaticPool so the app and
the test share one connection) and a fresh application instance.
"""

import os
import tempfile

os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="posadmin-uploads-")
os.environ["RATE_LIMIT_MAX_CALLS"] = "10000"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from posadmin.auth.deps import get_db
from posadmin.db.session import Base, init_db
from posadmin.main import create_app
from posadmin.models.catalog import Category, Product

PASSWORD = "secret123"


@pytest.fixture()
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db_session(session_factory):
    """Session for arranging and asserting on rows directly."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def app(session_factory):
    application = create_app()

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest.fixture()
def client(app):
    """Anonymous client; redirects are not followed so the gate is observable."""
    return TestClient(app, follow_redirects=False)


def register(client, name: str, email: str, password: str = PASSWORD):
    resp = client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
    assert resp.status_code == 201, resp.text
    return resp.json()["user"]


@pytest.fixture()
def admin_client(app):
    c = TestClient(app, follow_redirects=False)
    register(c, "Store Owner", "owner@pos-shop.com")
    return c


@pytest.fixture()
def cashier_client(app, admin_client):
    c = TestClient(app, follow_redirects=False)
    register(c, "Front Desk", "cashier@pos-shop.com")
    return c


@pytest.fixture()
def category(db_session):
    cat = Category(name="Beverages")
    db_session.add(cat)
    db_session.commit()
    db_session.refresh(cat)
    return cat


def make_product(db_session, category, name="Cola", price=1.5, stock=10, description="", image=None):
    product = Product(
        name=name,
        description=description,
        price=price,
        stock=stock,
        category_id=category.id,
        image=image,
    )
    db_session.add(product)
    db_session.commit()
    db_session.refresh(product)
    return product


@pytest.fixture()
def product(db_session, category):
    return make_product(db_session, category)
