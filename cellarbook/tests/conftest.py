"""Configuration et fixtures pytest"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from datetime import date

from cellarbook.core.database import Base, get_db
from cellarbook.main import app
from cellarbook.models.user import User
from cellarbook.models.product import Product
from cellarbook.core.security import get_password_hash, create_access_token

SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    """Fixture de base de données pour les tests"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Fixture du client de test FastAPI"""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def test_user(db):
    """Fixture d'un utilisateur de test"""
    user = User(
        email="test@example.com",
        name="Test User",
        password_hash=get_password_hash("testpass123"),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def test_user2(db):
    """Fixture d'un second utilisateur"""
    user = User(
        email="test2@example.com",
        name="Test User 2",
        password_hash=get_password_hash("testpass123"),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def make_product(db):
    """Fabrique de produits persistés"""

    def _make(owner, **fields):
        product = Product(owner_id=owner.id, **fields)
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make


@pytest.fixture
def test_product(make_product, test_user):
    """Fixture d'un produit de test"""
    return make_product(
        test_user,
        name="Malbec 2019",
        type="wine",
        country="Argentina",
        wine_type="red",
        grape_type=["Malbec"],
        price=45.5,
        bought=True,
        quantity_bought=2,
        date_of_purchase=date(2021, 6, 1),
        tags=["asado"],
    )


@pytest.fixture
def auth_headers(test_user):
    """Fixture des headers d'authentification"""
    token = create_access_token({"sub": str(test_user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers_user2(test_user2):
    """Fixture des headers d'authentification pour user2"""
    token = create_access_token({"sub": str(test_user2.id)})
    return {"Authorization": f"Bearer {token}"}
