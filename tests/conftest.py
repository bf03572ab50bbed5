import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.config.database import get_db
from app.core.auth.service import AuthService
from app.core.auth.throttle import login_throttle
from app.main import app
from app.shared.database.models import Base, Customer, Product, Role, User


@pytest.fixture
def engine(tmp_path):
    """Base SQLite en archivo: cada sesión usa su propia conexión"""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'tallerpro.db'}",
        connect_args={"check_same_thread": False}
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    login_throttle.reset()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _create_user(db, email, role, first_name, last_name, password="secret123"):
    user = User(
        email=email,
        password_hash=AuthService.get_password_hash(password),
        first_name=first_name,
        last_name=last_name,
        phone="999888777",
        role=role,
        is_active=True
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin_user(db):
    return _create_user(db, "admin@tallerpro.com", Role.ADMIN, "Ana", "Administradora")


@pytest.fixture
def tech_user(db):
    return _create_user(db, "tecnico@tallerpro.com", Role.TECHNICIAN, "Juan", "Pérez")


def _auth_headers(user):
    token = AuthService.create_access_token({"user_id": user.id, "email": user.email, "role": user.role.value})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin_user):
    return _auth_headers(admin_user)


@pytest.fixture
def tech_headers(tech_user):
    return _auth_headers(tech_user)


@pytest.fixture
def make_product(db):
    counter = {"n": 0}

    def _make(name=None, price="10.00", stock=5, category="Repuestos", description=None, cost=None):
        counter["n"] += 1
        product = Product(
            name=name or f"Producto {counter['n']}",
            description=description,
            price=Decimal(price),
            cost=Decimal(cost) if cost else Decimal(price) / 2,
            stock=stock,
            category=category,
            is_active=True
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make


@pytest.fixture
def customer(db):
    customer = Customer(
        name="Lucía Ramírez",
        email="lucia@example.com",
        phone="987654321",
        document_type="DNI",
        document_number="45678912"
    )
    db.add(customer)
    db.commit()
    db.refresh(customer)
    return customer


@pytest.fixture
def stock_of(db):
    """Stock actual leído de BD, sin lo que haya en la sesión"""
    def _stock(product_id):
        db.expire_all()
        return db.get(Product, product_id).stock

    return _stock
