import os

os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SEED_SAMPLE_DATA"] = "false"

import pytest
from fastapi.testclient import TestClient

from app.database import Base, SessionLocal, engine
from app.main import app
from app.core.rate_limiter import limiter


PASSWORD = "s3cret-pass"


@pytest.fixture(autouse=True)
def database():
    Base.metadata.create_all(bind=engine)
    limiter.enabled = False
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    test_client = TestClient(app)
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    def _register(username, password=PASSWORD):
        return client.post("/auth/register", json={"username": username, "password": password})

    return _register


@pytest.fixture
def login_headers(client):
    def _login_headers(username, password=PASSWORD):
        response = client.post("/auth/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _login_headers


@pytest.fixture
def admin_headers(register, login_headers):
    # First registration is promoted to admin
    assert register("admin").status_code == 201
    return login_headers("admin")


@pytest.fixture
def staff_headers(register, login_headers, admin_headers):
    assert register("staff").status_code == 201
    return login_headers("staff")


@pytest.fixture
def make_product(client, admin_headers):
    def _make_product(**overrides):
        payload = {
            "name": "Widget",
            "sku": "W-1",
            "category": "Electronics",
            "price": 10.00,
            "quantity": 5,
            "minStock": 10,
            "supplier": "TechCorp",
        }
        payload.update(overrides)
        response = client.post("/products", json=payload, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()["id"]

    return _make_product
