import os
import tempfile
from pathlib import Path

# Point the application at a throwaway database before anything imports config
_tmp_dir = Path(tempfile.mkdtemp(prefix="nexus-store-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_tmp_dir / 'test.db'}"
os.environ["STATIC_DIR"] = str(_tmp_dir / "static")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SECRET_KEY"] = "test-secret"
os.environ.pop("PUBLIC_API_URL", None)

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from database import Base, SessionLocal, engine  # noqa: E402
from main import app  # noqa: E402
from populate_db import DEMO_PASSWORD, seed_demo_data  # noqa: E402
from utils.rate_limit import limiter  # noqa: E402

SELLER_EMAIL = "john.seller@example.com"
BUYER_EMAIL = "jane.buyer@example.com"


@pytest.fixture(autouse=True)
def fresh_database():
    """Every test starts from the demo dataset only."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        seed_demo_data(session)
    finally:
        session.close()
    limiter.reset()
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def login(client, email, password=DEMO_PASSWORD):
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def buyer_headers(client):
    return bearer(login(client, BUYER_EMAIL))


@pytest.fixture
def seller_headers(client):
    return bearer(login(client, SELLER_EMAIL))


@pytest.fixture
def register_buyer(client):
    def _register(email="new.buyer@example.com", password="secret123", name="New Buyer"):
        response = client.post("/api/auth/register", json={
            "email": email, "password": password, "name": name, "role": "buyer",
        })
        assert response.status_code == 201, response.text
        return bearer(response.json()["token"])
    return _register
