import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENV", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.session import Base, get_db
from app.main import app
from app.models.user import User
from app.models.booking import Booking  # noqa: F401

engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

PASSWORD = "Secret123"


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def _schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def register(client, email="traveler@example.com", password=PASSWORD, first="Ada", last="Lovelace"):
    r = client.post("/api/v1/auth/register", json={
        "firstName": first, "lastName": last, "email": email, "password": password,
    })
    assert r.status_code == 201, r.text
    return r.json()["data"]


def auth(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_token(client):
    return register(client)["token"]


@pytest.fixture
def admin_token(client, db):
    data = register(client, email="admin@example.com", first="Root", last="Admin")
    u = db.get(User, data["user"]["id"])
    u.role = "admin"
    db.commit()
    return data["token"]


def create_booking(client, token, **overrides):
    body = {
        "type": "flight",
        "totalAmount": 289.0,
        "currency": "usd",
        "bookingDetails": {"departure": {"airport": "JFK", "date": "2099-01-15T08:00:00"},
                           "arrival": {"airport": "LAX", "date": "2099-01-15T14:00:00"}},
    }
    body.update(overrides)
    r = client.post("/api/v1/bookings", json=body, headers=auth(token))
    assert r.status_code == 201, r.text
    return r.json()["data"]["booking"]
