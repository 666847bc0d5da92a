import os

# przed importem storefront - settings czytane przy imporcie
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["REDIS_URL"] = ""
os.environ["APP_ENV"] = "test"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.celery_worker import celery_app
from storefront.data.database import Base, get_db, init_db
from storefront.data.models import ProductModel, UserModel, CartItemModel
from storefront.main import create_app
from storefront.services.cache_service import get_cache
from storefront.utils.security import hash_password


class InMemoryCache:
    """Zamiennik ProductCache w testach - ten sam interfejs, slownik zamiast redisa."""

    def __init__(self):
        self.store = {}
        self.ttls = {}

    def get_json(self, key):
        return self.store.get(key)

    def set_json(self, key, value, ttl):
        self.store[key] = value
        self.ttls[key] = ttl
        return True

    def delete(self, key):
        return self.store.pop(key, None) is not None

    def ping(self):
        return True


@pytest.fixture(autouse=True)
def eager_celery():
    celery_app.conf.task_always_eager = True
    yield
    celery_app.conf.task_always_eager = False


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def cache():
    return InMemoryCache()


@pytest.fixture()
def app(session_factory, cache):
    app = create_app(run_migrations=False)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache] = lambda: cache
    return app


@pytest.fixture()
def client(app):
    return TestClient(app)


@pytest.fixture()
def make_user(db):
    def _make_user(email="shopper@example.com", password="ShopPass123!"):
        user = UserModel(
            email=email,
            password_hash=hash_password(password),
            first_name="Shopping",
            last_name="User",
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def make_product(db):
    def _make_product(name="Widget", price="29.99", stock=10, **kwargs):
        product = ProductModel(name=name, price=Decimal(price), stock=stock, **kwargs)
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make_product


@pytest.fixture()
def add_to_cart(db):
    def _add_to_cart(user, product, quantity):
        item = CartItemModel(user_id=user.id, product_id=product.id, quantity=quantity)
        db.add(item)
        db.commit()
        return item

    return _add_to_cart


@pytest.fixture()
def logged_in(client, make_user):
    """Klient z aktywna sesja. Zwraca zalogowanego uzytkownika."""
    user = make_user()
    response = client.post(
        "/api/auth/login",
        json={"email": "shopper@example.com", "password": "ShopPass123!"},
    )
    assert response.status_code == 200
    return user
