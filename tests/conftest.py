import pytest
from fastapi.testclient import TestClient

from shipment_service.core_settings import Settings
from shipment_service.main import create_app

# SQLAlchemy URL for a private in-memory SQLite database
SQLITE_MEMORY_URL = "sqlite://"

SAMPLE_SHIPMENT = {
    "nama": "A",
    "pengirim": "B",
    "namaPenerima": "C",
    "alamatPenerima": "D",
    "namaItem": "E",
    "beratItem": 10,
}


def make_settings(**overrides) -> Settings:
    overrides.setdefault("DATABASE_URL", None)
    return Settings(_env_file=None, **overrides)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ("DATABASE_URL", "SEED_DEMO_SHIPMENT", "PORT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(params=["memory", "database"])
def client(request):
    """Client against a fresh app, once per backing store."""
    url = SQLITE_MEMORY_URL if request.param == "database" else None
    app = create_app(make_settings(DATABASE_URL=url))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def memory_client():
    app = create_app(make_settings())
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def database_client():
    app = create_app(make_settings(DATABASE_URL=SQLITE_MEMORY_URL))
    with TestClient(app) as test_client:
        yield test_client
