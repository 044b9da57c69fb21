import os

# baza w pamieci zanim storefront utworzy engine
os.environ["DATABASE_URL"] = "sqlite://"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

import storefront.data.models  # noqa: F401
from storefront.data.database import Base, SessionLocal, engine
from storefront.data.models.catalog import ProductModel, VariantModel
from storefront.data.models.user import UserModel
from storefront.domain.enums import Role


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture()
def client():
    from storefront.main import create_app

    return TestClient(create_app())


@pytest.fixture()
def make_user(db):
    def _make(full_name="Ali", role=Role.USER, phone=None, email=None):
        user = UserModel(full_name=full_name, role=role.value, phone=phone, email=email, is_active=True)
        db.add(user)
        db.commit()
        return user

    return _make


@pytest.fixture()
def make_variant(db):
    def _make(price, name="T-shirt", size="M", color="white"):
        variant = VariantModel(size=size, color=color, price=Decimal(str(price)))
        db.add(ProductModel(name=name, variants=[variant]))
        db.commit()
        return variant

    return _make


@pytest.fixture()
def alice(make_user):
    return make_user("Alice", phone="+998901111111")


@pytest.fixture()
def bob(make_user):
    return make_user("Bob", phone="+998902222222")


@pytest.fixture()
def admin(make_user):
    return make_user("Admin", role=Role.ADMIN, phone="+998903333333")


@pytest.fixture()
def headers_for():
    def _headers(user, role=None):
        return {"X-User-Id": str(user.id), "X-User-Role": (role or Role(user.role)).value}

    return _headers
